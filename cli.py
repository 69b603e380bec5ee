# Role: Local developer CLI to practice with the tutor without the mobile app or web UI.
# Runs TutorFlow in-process and keeps the conversation context the way a client would.

from __future__ import annotations

import json

import backend.config
backend.config.load_env()

from backend.config import Settings
from backend.core.errors import TutorError
from backend.core.tutor_flow import TutorFlow
from backend.core.validator import APP_TOKEN_HEADER, normalize_language
from backend.llm.gemini_client import GeminiClient
from backend.llm.openai_client import OpenAIClient
from backend.utils.client_context import TutorSession

PROVIDERS = {"gemini": GeminiClient, "openai": OpenAIClient}


def new_session(settings: Settings) -> TutorSession:
    provider = settings.tutor_provider if settings.tutor_provider in PROVIDERS else "openai"
    return TutorSession(provider=provider, chain_responses=settings.openai_store_responses)


def take_turn(settings: Settings, session: TutorSession, user_message: str) -> str:
    # 1) Build the body from client-side context
    # 2) Run the turn in-process
    # 3) Update context (a 4xx drops the continuation id)
    flow = TutorFlow(settings, PROVIDERS[session.provider])
    raw_body = json.dumps(session.body(user_message)).encode("utf-8")
    try:
        reply = flow.handle_turn({APP_TOKEN_HEADER: settings.app_token}, raw_body)
    except TutorError as e:
        session.record_failure(e.status_code)
        return f"[{e.status_code}] {json.dumps(e.payload(), ensure_ascii=False)}"

    session.record(user_message, reply.text, reply.response_id)
    return f"Tutor: {reply.text}"


def main() -> None:
    # 1) Build Settings + pick provider
    # 2) Keep client-side context across turns
    # 3) Route user input -> TutorFlow -> print tutor output
    settings = Settings.from_env()
    session = new_session(settings)

    print("Language Tutor CLI")
    print("Commands: /new (reset context), /lang es|it, /provider gemini|openai, /exit")
    print("-" * 50)
    print(f"provider: {session.provider} | lang: {normalize_language(session.lang).display_name}")

    while True:
        try:
            user_message = input("\nYou: ").strip()
        except (EOFError, KeyboardInterrupt):
            print("\nTchau!")
            return

        if not user_message:
            continue

        cmd, _, arg = user_message.partition(" ")
        cmd = cmd.lower()
        arg = arg.strip().lower()

        if cmd in {"/exit", "exit", "quit", "/quit"}:
            print("Tchau!")
            return

        if cmd == "/new":
            session.reset()
            print("Context cleared.")
            continue

        if cmd == "/lang":
            session.switch(lang=normalize_language(arg).value)
            print(f"lang: {normalize_language(session.lang).display_name}")
            continue

        if cmd == "/provider":
            if arg not in PROVIDERS:
                print(f"Unknown provider '{arg}'. Use one of: {', '.join(PROVIDERS)}")
                continue
            session.switch(provider=arg)
            print(f"provider: {session.provider}")
            continue

        print(f"\n{take_turn(settings, session, user_message)}")


if __name__ == "__main__":
    main()
