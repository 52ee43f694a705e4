"""Prompt templates for insight analysis and daily tips."""

from .models import SourceRecords

MAX_JOURNAL_ENTRIES = 20
MAX_ENTRY_CHARS = 600
MAX_CHAT_MESSAGES = 30
MAX_MESSAGE_CHARS = 300

INSIGHT_SYSTEM = """Você é um psicólogo clínico experiente analisando dados de um usuário de um aplicativo de saúde mental.

Analise os registros fornecidos (diário, conversas com o assistente, sessões de terapia e perfil) e identifique padrões emocionais, cognitivos e comportamentais.

Regras:
- Baseie-se apenas nos dados fornecidos. Não invente fatos.
- Use rótulos de humor em português (ex.: ansiedade, tristeza, calma, alegria).
- "trend" deve ser exatamente um de: improving, stable, declining.
- "confidenceScore" é um número entre 0 e 1 proporcional à quantidade e consistência dos dados.
- Responda APENAS com um objeto JSON no formato abaixo, sem markdown.

{
  "emotionalPatterns": {"dominantMood": "", "secondaryMoods": [], "trend": "stable", "commonTriggers": []},
  "cognitivePatterns": {"recurrentThoughts": [], "cognitiveDistortions": [], "selfTalkPatterns": []},
  "behavioralPatterns": {"copingStrategies": [], "avoidanceBehaviors": [], "positiveActivities": []},
  "treatmentContext": {"therapyGoals": [], "effectiveInterventions": [], "challengingAreas": []},
  "metadata": {"confidenceScore": 0.0}
}"""

TIP_SYSTEM = """Você cria dicas diárias de bem-estar emocional baseadas em evidências.

Responda APENAS com um objeto JSON:
{"title": "", "content": "", "category": "", "tags": [], "sources": [], "evidenceLevel": "high|moderate|low"}

O conteúdo deve ter no máximo 3 frases, ser prático e acolhedor."""


def _truncate(text: str, limit: int) -> str:
    text = " ".join(text.split())
    return text if len(text) <= limit else text[: limit - 3] + "..."


def build_insight_prompt(records: SourceRecords) -> str:
    """Render the user's source records as a plain-text analysis prompt."""
    sections = []

    if records.journal:
        lines = []
        for entry in sorted(records.journal, key=lambda e: e.date, reverse=True)[
            :MAX_JOURNAL_ENTRIES
        ]:
            meta = [entry.date.strftime("%Y-%m-%d")]
            if entry.mood:
                meta.append(f"humor: {entry.mood}")
            if entry.tags:
                meta.append(f"tags: {', '.join(entry.tags)}")
            body = entry.summary or entry.content
            lines.append(f"- [{'; '.join(meta)}] {_truncate(body, MAX_ENTRY_CHARS)}")
        sections.append("DIÁRIO:\n" + "\n".join(lines))

    user_messages = [m for m in records.chat if m.role == "user"]
    if user_messages:
        lines = [
            f"- {_truncate(m.content, MAX_MESSAGE_CHARS)}"
            for m in sorted(user_messages, key=lambda m: m.timestamp, reverse=True)[
                :MAX_CHAT_MESSAGES
            ]
        ]
        sections.append("CONVERSAS COM O ASSISTENTE:\n" + "\n".join(lines))

    if records.sessions:
        lines = []
        for s in records.sessions:
            line = f"- {s.scheduled_for.strftime('%Y-%m-%d')} ({s.status}, {s.type})"
            if s.notes:
                line += f": {_truncate(s.notes, MAX_ENTRY_CHARS)}"
            lines.append(line)
        sections.append("SESSÕES DE TERAPIA:\n" + "\n".join(lines))

    profile = records.profile
    if profile is not None and not profile.is_empty():
        lines = []
        if profile.occupation:
            lines.append(f"- Ocupação: {profile.occupation}")
        if profile.goals:
            lines.append(f"- Objetivos: {', '.join(profile.goals)}")
        if profile.anxieties:
            lines.append(f"- Ansiedades: {', '.join(profile.anxieties)}")
        if profile.fears:
            lines.append(f"- Medos: {', '.join(profile.fears)}")
        sections.append("PERFIL:\n" + "\n".join(lines))

    return "\n\n".join(sections)


def build_tip_prompt(dominant_mood: str, trend: str, triggers: list[str]) -> str:
    prompt = f"Humor predominante do usuário: {dominant_mood}\nTendência: {trend}"
    if triggers:
        prompt += f"\nGatilhos recentes: {', '.join(triggers[:3])}"
    return prompt + "\n\nCrie uma dica para hoje."
