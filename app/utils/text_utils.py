import re
from typing import List, Optional, Sequence

SPEAKER_LABELS = ("You:", "Therapist:")

_TERMINAL_PUNCT_RE = re.compile(r"[.!?…।]$")


def clean_for_tts(text: str) -> str:
    """Sanitize model output so the TTS voice does not read markup aloud.

    - Strip basic Markdown: **bold**, *italics*, __, `code`, [label](url)
    - Drop heading markers and list bullets ("-", "*", "•") at line start
    - Join lines into sentences, adding a period (or danda for Devanagari) where missing
    - Collapse spaces and fix spacing around punctuation
    """
    if not text:
        return text

    s = str(text).replace("\\n", "\n").replace("\r\n", "\n")

    s = re.sub(r"\[([^\]]+)\]\(([^)]+)\)", r"\1", s)

    s = s.replace("**", "").replace("__", "").replace("`", "")
    s = re.sub(r"^\s*#+\s*", "", s, flags=re.MULTILINE)
    s = re.sub(r"^\s*[-*•]\s+", "", s, flags=re.MULTILINE)
    # Single * or _ used for italics
    s = re.sub(r"(?<!\w)[*_](?!\w)|(?<=\w)[*_](?!\w)|(?<!\w)[*_](?=\w)", "", s)

    lines = [ln.strip() for ln in s.split("\n") if ln.strip()]
    processed = []
    for ln in lines:
        if _TERMINAL_PUNCT_RE.search(ln):
            processed.append(ln)
        elif has_devanagari(ln):
            processed.append(ln + "।")
        else:
            processed.append(ln + ".")
    s = " ".join(processed)

    s = re.sub(r"\s+([,.!?…।])", r"\1", s)
    s = re.sub(r"\(\s+", "(", s)
    s = re.sub(r"\s+\)", ")", s)
    s = re.sub(r"\s{2,}", " ", s).strip()

    return s


def has_devanagari(text: str) -> bool:
    return any("\u0900" <= ch <= "\u097F" for ch in text)


def speaker_label(line: str, labels: Sequence[str] = SPEAKER_LABELS) -> Optional[str]:
    stripped = line.lstrip()
    for label in labels:
        if stripped.startswith(label):
            return label
    return None


def transcript_shape(transcript: str, labels: Sequence[str] = SPEAKER_LABELS) -> List[Optional[str]]:
    """Speaker label (or None) of every line; two transcripts with equal shapes share structure."""
    return [speaker_label(line, labels) for line in transcript.strip().split("\n")]
