"""Daily tip model and the deterministic tip catalog."""

from dataclasses import asdict, dataclass, field
from datetime import datetime

from insights.catalog import match_mood

DEFAULT_CATEGORY = "Bem-estar Emocional"

TIP_CATEGORIES = {
    "ansiedade": "Controle de Ansiedade",
    "preocupação": "Controle de Ansiedade",
    "tristeza": "Elevação do Humor",
    "desânimo": "Elevação do Humor",
    "raiva": "Regulação Emocional",
    "frustração": "Regulação Emocional",
    "medo": "Superação de Medos",
    "alegria": "Cultivo da Gratidão",
    "gratidão": "Cultivo da Gratidão",
    "calma": "Mindfulness",
}

# category -> (title, content, tags)
_FALLBACK_TIPS: dict[str, tuple[str, str, list[str]]] = {
    "Controle de Ansiedade": (
        "Respiração para acalmar a mente",
        "Inspire por 4 segundos, segure por 7 e expire por 8. Repita quatro vezes "
        "sempre que perceber a ansiedade aumentando.",
        ["ansiedade", "respiração"],
    ),
    "Elevação do Humor": (
        "Pequenas ações, grandes mudanças",
        "Escolha uma atividade simples que você costumava gostar e faça-a por 10 minutos hoje. "
        "Pequenos passos ajudam a recuperar a energia.",
        ["humor", "ativação comportamental"],
    ),
    "Regulação Emocional": (
        "A pausa antes da reação",
        "Quando sentir a irritação crescer, conte até dez e nomeie o que está sentindo. "
        "Nomear a emoção reduz sua intensidade.",
        ["regulação emocional", "raiva"],
    ),
    "Superação de Medos": (
        "Um passo de cada vez",
        "Divida aquilo que você teme em etapas pequenas e enfrente apenas a primeira hoje. "
        "A exposição gradual reduz o medo com o tempo.",
        ["medo", "exposição gradual"],
    ),
    "Cultivo da Gratidão": (
        "Registre o que foi bom",
        "Antes de dormir, anote três coisas boas que aconteceram hoje e por que elas importam para você.",
        ["gratidão", "bem-estar"],
    ),
    "Mindfulness": (
        "Um minuto de atenção plena",
        "Pare por um minuto e observe cinco coisas que você vê, quatro que ouve e três que sente no corpo.",
        ["mindfulness", "atenção plena"],
    ),
    DEFAULT_CATEGORY: (
        "Cuide de você hoje",
        "Reserve alguns minutos para perceber como você está se sentindo e registre no seu diário.",
        ["autocuidado"],
    ),
}


@dataclass
class DailyTip:
    title: str
    content: str
    category: str
    tags: list[str] = field(default_factory=list)
    sources: list[str] = field(default_factory=list)
    evidence_level: str = "moderate"
    ai_generated: bool = False
    created_at: datetime = field(default_factory=datetime.now)

    def to_dict(self) -> dict:
        data = asdict(self)
        data["created_at"] = self.created_at.isoformat()
        return data


def tip_category(mood: str | None) -> str:
    return TIP_CATEGORIES.get(match_mood(mood), DEFAULT_CATEGORY)


def fallback_tip(mood: str | None, now: datetime | None = None) -> DailyTip:
    category = tip_category(mood)
    title, content, tags = _FALLBACK_TIPS[category]
    return DailyTip(
        title=title,
        content=content,
        category=category,
        tags=list(tags),
        sources=["Terapia Cognitivo-Comportamental"],
        evidence_level="moderate",
        created_at=now or datetime.now(),
    )
