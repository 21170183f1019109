"""
Interactive CV config collection.

Asks for personal details and each optional section on the terminal and
returns a :class:`CvConfig`. Questions are in Portuguese, the base locale.
Empty answers mean "omit".
"""

import logging
from typing import Any, Callable, Dict, List, Optional

from .errors import ValidationError
from .model import CvConfig

logger = logging.getLogger(__name__)

InputFunc = Callable[[str], str]

YES_ANSWERS = ("s", "sim", "y", "yes")

PERSONAL_PROMPTS = (
    ("nationality", "Nacionalidade (vazio = omitir)"),
    ("sex", "Sexo (vazio = omitir)"),
    ("email", "Email (vazio = omitir)"),
    ("phone", "Telemóvel (vazio = omitir)"),
    ("address", "Morada (vazio = omitir)"),
)


def ask(message: str, input_func: Optional[InputFunc] = None) -> str:
    """
    Ask one question; EOF counts as an empty answer.

    ``input_func`` defaults to the built-in :func:`input`, looked up at call
    time.
    """
    if input_func is None:
        input_func = input
    try:
        return input_func(f"{message}: ").strip()
    except EOFError:
        return ""


def ask_required(
    message: str,
    input_func: Optional[InputFunc] = None,
    attempts: int = 3,
) -> str:
    """
    Ask until a non-blank answer is given.

    Raises:
        ValidationError: If no answer was given after ``attempts`` tries.
    """
    for _ in range(attempts):
        answer = ask(message, input_func)
        if answer:
            return answer
        print(f"  {message.strip()}: resposta obrigatória")
    raise ValidationError(f"No answer given for: {message.strip()}")


def confirm(message: str, input_func: Optional[InputFunc] = None, default: bool = False) -> bool:
    """Yes/no question ("s"/"sim" or "y"/"yes")."""
    suffix = " [s/N]" if not default else " [S/n]"
    answer = ask(message + suffix, input_func).lower()
    if not answer:
        return default
    return answer in YES_ANSWERS


def ask_lines(message: str, input_func: Optional[InputFunc] = None) -> List[str]:
    """Collect lines until an empty one."""
    print(f"\n{message}")
    lines = []
    while True:
        line = ask(">", input_func)
        if not line:
            return lines
        lines.append(line)


def _ask_experience(input_func: Optional[InputFunc]) -> List[Dict[str, Any]]:
    items = []
    while True:
        item = {
            "from": ask("  De (ano, ex: 2019)", input_func),
            "to": ask("  A (ano, ex: 2024 ou Atual)", input_func),
            "country": ask("  País/local (ex: Portugal)", input_func),
            "role": ask_required("  Cargo/função", input_func),
            "company": ask("  Empresa (vazio = omitir)", input_func),
            "bullets": ask_lines("  Responsabilidades (linha vazia termina)", input_func),
        }
        items.append(item)
        if not confirm("Adicionar outra experiência?", input_func):
            return items


def _ask_education(input_func: Optional[InputFunc]) -> List[Dict[str, Any]]:
    items = []
    while True:
        items.append({
            "title": ask_required("  Título da qualificação (ex: Ensino Secundário)", input_func),
            "institution": ask("  Instituição (vazio = omitir)", input_func),
        })
        if not confirm("Adicionar outra formação?", input_func):
            return items


def _ask_languages(input_func: Optional[InputFunc]) -> List[Dict[str, Any]]:
    items = []
    while True:
        items.append({
            "language": ask_required("  Língua (ex: Português)", input_func),
            "level": ask_required("  Nível (ex: Materna, C1, Avançado)", input_func),
        })
        if not confirm("Adicionar outra língua?", input_func):
            return items


def collect_config(input_func: Optional[InputFunc] = None) -> CvConfig:
    """
    Build a CV config by asking questions on the terminal.

    Args:
        input_func: Replacement for :func:`input` (used by tests).

    Raises:
        ValidationError: If a required answer (name, role, ...) is never given.
    """
    personal: Dict[str, str] = {}
    photo = ask("Caminho para foto (vazio = sem foto)", input_func)
    if photo:
        personal["photoPath"] = photo
    personal["name"] = ask_required("Nome (obrigatório)", input_func)
    for key, message in PERSONAL_PROMPTS:
        value = ask(message, input_func)
        if value:
            personal[key] = value

    sections: Dict[str, Any] = {}
    if confirm("Incluir secção Apresentação?", input_func):
        text = "\n".join(ask_lines("Texto de apresentação (linha vazia termina)", input_func))
        sections["presentation"] = {"text": text}
    if confirm("Incluir secção Objetivo Profissional?", input_func):
        sections["objective"] = {"text": ask("Objetivo profissional", input_func)}
    if confirm("Incluir secção Experiência Profissional?", input_func):
        sections["experience"] = _ask_experience(input_func)
    if confirm("Incluir secção Educação e Formação?", input_func):
        sections["education"] = _ask_education(input_func)
    if confirm("Incluir secção Competências Linguísticas?", input_func):
        sections["languages"] = _ask_languages(input_func)
    if confirm("Incluir secção Habilidades?", input_func):
        sections["skills"] = ask_lines("Habilidades (linha vazia termina)", input_func)

    logger.debug(f"Collected sections: {', '.join(sections) or 'none'}")
    return CvConfig.from_dict({"personal": personal, "sections": sections})
