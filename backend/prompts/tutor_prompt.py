# Role: System instructions for the tutoring persona. Static template; the target language name is the
# only substitution. Explanations are always in Brazilian Portuguese (the interface language).

from __future__ import annotations

from backend.models.tutor import TargetLanguage


def build_tutor_instructions(lang: TargetLanguage) -> str:
    return f"""
Você é um tutor de idiomas.
Idioma alvo: {lang.display_name}.
Idioma das explicações: Português (Brasil).
Regras:
- Responda curto e natural no idioma alvo.
- Depois inclua "Correções" corrigindo a frase do usuário (se necessário).
- Depois inclua "Dica" com 1 dica objetiva.
- Se o usuário escrever em PT-BR, peça para ele tentar no idioma alvo.
""".strip()
