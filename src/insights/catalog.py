"""Mood catalog: canonical labels, display states, intensity/valence and actions.

Mood labels are Portuguese, as entered by users and returned by the
analysis backend.
"""

import unicodedata

GENERIC_STATE = "Estado Emocional Atual"
NEUTRAL_MOOD = "neutro"

# canonical mood -> (display state, base intensity 0-100, valence 1-5)
MOODS: dict[str, tuple[str, int, int]] = {
    "alegria": ("Estado Positivo - Alegria", 70, 5),
    "calma": ("Estado de Equilíbrio - Calma", 30, 4),
    "esperança": ("Estado Positivo - Esperança", 60, 4),
    "gratidão": ("Estado Positivo - Gratidão", 65, 4),
    "entusiasmo": ("Estado Energizado - Entusiasmo", 80, 4),
    "satisfação": ("Estado Positivo - Satisfação", 60, 4),
    "neutro": ("Estado Neutro", 50, 3),
    "confusão": ("Estado de Incerteza - Confusão", 65, 2),
    "ansiedade": ("Estado de Alerta - Ansiedade", 75, 2),
    "preocupação": ("Estado de Alerta - Preocupação", 70, 2),
    "tristeza": ("Estado de Baixa Energia - Tristeza", 65, 1),
    "frustração": ("Estado de Tensão - Frustração", 75, 1),
    "raiva": ("Estado de Tensão - Raiva", 85, 1),
    "medo": ("Estado de Alerta - Medo", 80, 1),
    "desânimo": ("Estado de Baixa Energia - Desânimo", 60, 1),
}

DEFAULT_INTENSITY = 50
DEFAULT_VALENCE = 3

# Moods that raise recommendation priority
CHALLENGING_MOODS = frozenset({"ansiedade", "tristeza", "raiva", "medo", "desânimo"})

GENERIC_ACTION = "Continue registrando seus pensamentos e sentimentos no diário"

_CATEGORY_BY_MOOD = {
    "ansiedade": "anxiety",
    "preocupação": "anxiety",
    "medo": "anxiety",
    "tristeza": "sadness",
    "desânimo": "sadness",
    "raiva": "anger",
    "frustração": "anger",
}

ACTIONS: dict[str, list[str]] = {
    "anxiety": [
        "Pratique a respiração 4-7-8 por alguns minutos",
        "Anote suas preocupações e separe o que está sob seu controle",
        "Faça uma caminhada curta para reduzir a tensão",
    ],
    "sadness": [
        "Entre em contato com alguém de confiança hoje",
        "Reserve um tempo para uma atividade que costumava lhe trazer prazer",
        "Exponha-se à luz natural por alguns minutos",
    ],
    "anger": [
        "Faça uma pausa antes de responder a situações difíceis",
        "Use exercício físico para liberar a tensão acumulada",
        "Identifique o pensamento por trás da irritação e questione-o",
    ],
    "neutral": [
        "Pratique alguns minutos de mindfulness",
        "Anote três coisas pelas quais você é grato hoje",
        "Defina uma pequena meta para o seu dia",
    ],
}


def _fold(text: str) -> str:
    decomposed = unicodedata.normalize("NFKD", text.strip().lower())
    return "".join(c for c in decomposed if not unicodedata.combining(c))


_FOLDED = {_fold(m): m for m in MOODS}


def match_mood(label: str | None) -> str | None:
    """Map a free-form mood label to a canonical catalog mood.

    Exact match first, then substring in either direction. Accents and case
    are ignored. Returns None when nothing matches.
    """
    if not label:
        return None
    folded = _fold(label)
    if not folded:
        return None
    if folded in _FOLDED:
        return _FOLDED[folded]
    for key, mood in _FOLDED.items():
        if key in folded or folded in key:
            return mood
    return None


def state_label(label: str | None) -> str:
    mood = match_mood(label)
    return MOODS[mood][0] if mood else GENERIC_STATE


def base_intensity(label: str | None) -> int:
    mood = match_mood(label)
    return MOODS[mood][1] if mood else DEFAULT_INTENSITY


def valence(label: str | None) -> int:
    mood = match_mood(label)
    return MOODS[mood][2] if mood else DEFAULT_VALENCE


def action_category(label: str | None) -> str:
    return _CATEGORY_BY_MOOD.get(match_mood(label), "neutral")


def is_challenging(label: str | None) -> bool:
    return match_mood(label) in CHALLENGING_MOODS


def suggested_actions(
    label: str | None,
    coping_strategies: list[str] | None = None,
    cognitive_distortions: list[str] | None = None,
    limit: int = 4,
) -> list[str]:
    """Generic encouragement first, then insight-specific, then category actions."""
    actions = [GENERIC_ACTION]
    if coping_strategies:
        actions.append(f"Pratique {coping_strategies[0].strip().rstrip('.').lower()}")
    if cognitive_distortions:
        actions.append(
            f"Observe quando surgir o padrão '{cognitive_distortions[0].strip()}' e questione-o"
        )
    for action in ACTIONS[action_category(label)]:
        if len(actions) >= limit:
            break
        actions.append(action)
    return actions[:limit]
