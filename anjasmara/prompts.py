from __future__ import annotations

DEFAULT_CAPTION_TONE = "inspiratif"

CAPTION_TEMPLATE = (
    "Buatkan caption Instagram singkat dan menarik dalam bahasa Indonesia "
    "dengan tone {tone} berdasarkan teks ini: {text}. "
    "Sertakan 3 tagar relevan."
)

TRANSCRIPT_STUB_MESSAGE = (
    "Transcript fetching is environment-dependent. Use an external transcript service "
    "or provide the text. This endpoint is a stub to show where to implement transcript fetching."
)

BAD_VIDEO_URL_MESSAGE = "Could not parse video id. Provide a full YouTube URL."


def build_caption_prompt(text: str, tone: str | None = None) -> str:
    # caller text goes into the instruction verbatim (prompt-injection surface left as is)
    return CAPTION_TEMPLATE.format(tone=tone or DEFAULT_CAPTION_TONE, text=text)
