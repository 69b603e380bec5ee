# Role: Streamlit chat UI for the tutor.
# - Backend is authoritative (one POST per turn).
# - The UI keeps the only conversation memory, via TutorSession (history for Gemini,
#   previous_response_id for OpenAI when the deployment stores responses).

from __future__ import annotations

import os
from typing import Any, Dict, Optional

import requests
import streamlit as st

from backend.config import Settings
from backend.utils.client_context import TutorSession

BACKEND_URL = os.getenv("TUTOR_BACKEND_URL", "http://127.0.0.1:8000")
APP_TOKEN = os.getenv("APP_TOKEN", "")

LANGUAGES = {"es": "Espanhol", "it": "Italiano"}
PROVIDERS = {"gemini": "/gemini/tutor", "openai": "/openai/tutor"}

# ----------------------------
# Session helpers
# ----------------------------
def ensure_session() -> None:
    if "messages" not in st.session_state:
        st.session_state["messages"] = []
    if "tutor" not in st.session_state:
        st.session_state["tutor"] = TutorSession(
            provider="gemini",
            chain_responses=Settings.from_env().openai_store_responses,
        )
    if "busy" not in st.session_state:
        st.session_state["busy"] = False

def reset_conversation() -> None:
    st.session_state["messages"] = []
    st.session_state["tutor"].reset()

# ----------------------------
# Backend calls
# ----------------------------
def send_to_backend(provider: str, body: Dict[str, Any]) -> Dict[str, Any]:
    headers = {"x-app-token": APP_TOKEN} if APP_TOKEN else {}
    resp = requests.post(f"{BACKEND_URL}{PROVIDERS[provider]}", json=body, headers=headers, timeout=45)
    try:
        data = resp.json()
    except ValueError:
        data = {}
    if resp.status_code != 200:
        raise BackendError(resp.status_code, data)
    return data

class BackendError(Exception):
    def __init__(self, status: int, data: Dict[str, Any]) -> None:
        self.status = status
        self.data = data
        super().__init__(f"{status}: {data.get('error') or 'unknown error'}")

# ----------------------------
# Sidebar
# ----------------------------
def render_sidebar() -> TutorSession:
    st.sidebar.title("Tutor")
    tutor: TutorSession = st.session_state["tutor"]

    lang = st.sidebar.radio(
        "Idioma alvo",
        options=list(LANGUAGES),
        format_func=lambda k: LANGUAGES[k],
        disabled=st.session_state["busy"],
    )
    provider = st.sidebar.radio("Provider", options=list(PROVIDERS), disabled=st.session_state["busy"])

    # Key line: context from another provider/language is never resent.
    if tutor.switch(provider=provider, lang=lang):
        st.session_state["messages"] = []

    if st.sidebar.button("📝 Nova conversa", use_container_width=True, disabled=st.session_state["busy"]):
        reset_conversation()
        st.rerun()

    last_id: Optional[str] = tutor.previous_response_id
    if last_id:
        st.sidebar.caption(f"response_id: {last_id}")

    return tutor

# ----------------------------
# Chat
# ----------------------------
def render_chat() -> None:
    for msg in st.session_state["messages"]:
        with st.chat_message(msg["role"]):
            st.write(msg["content"])

# ----------------------------
# Main
# ----------------------------
def main() -> None:
    st.set_page_config(page_title="Language Tutor", page_icon="🗣️", layout="wide")

    st.title("🗣️ Language Tutor")
    st.caption("Pratique espanhol ou italiano. O tutor responde, corrige e dá uma dica.")

    ensure_session()
    tutor = render_sidebar()
    render_chat()

    user_input = st.chat_input("Escreva no idioma alvo…", disabled=st.session_state["busy"])
    if not user_input:
        return

    # Echo user message immediately
    st.session_state["messages"].append({"role": "user", "content": user_input})
    with st.chat_message("user"):
        st.write(user_input)

    st.session_state["busy"] = True
    try:
        body = tutor.body(user_input)
        with st.spinner("Pensando..."):
            data = send_to_backend(tutor.provider, body)

        tutor_text = data.get("text") or "(sem resposta)"
        tutor.record(user_input, tutor_text, data.get("response_id"))
        st.session_state["messages"].append({"role": "assistant", "content": tutor_text})
        with st.chat_message("assistant"):
            st.write(tutor_text)

    except BackendError as e:
        tutor.record_failure(e.status)
        st.session_state["messages"].pop()
        with st.chat_message("assistant"):
            st.error(f"Backend error {e}")
    except requests.RequestException:
        st.session_state["messages"].pop()
        msg = f"Não consegui falar com o backend. Verifique se a API está rodando em {BACKEND_URL}."
        with st.chat_message("assistant"):
            st.error(msg)
    finally:
        st.session_state["busy"] = False

if __name__ == "__main__":
    main()
