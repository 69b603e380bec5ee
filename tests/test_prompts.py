from backend.models.tutor import TargetLanguage
from backend.prompts.tutor_prompt import build_tutor_instructions

EXPECTED_SPANISH = """Você é um tutor de idiomas.
Idioma alvo: Espanhol (rioplatense neutro).
Idioma das explicações: Português (Brasil).
Regras:
- Responda curto e natural no idioma alvo.
- Depois inclua "Correções" corrigindo a frase do usuário (se necessário).
- Depois inclua "Dica" com 1 dica objetiva.
- Se o usuário escrever em PT-BR, peça para ele tentar no idioma alvo."""


def test_spanish_template_is_exact() -> None:
    assert build_tutor_instructions(TargetLanguage.SPANISH) == EXPECTED_SPANISH


def test_italian_only_changes_target_line() -> None:
    expected = EXPECTED_SPANISH.replace("Espanhol (rioplatense neutro)", "Italiano")
    assert build_tutor_instructions(TargetLanguage.ITALIAN) == expected
