"""
Text Generation Service
=======================

Drafts nomination narratives and summarizes voting patterns through an
OpenAI-compatible chat completions endpoint.

Both calls degrade to a fixed fallback string when no API key is configured
or the request fails, so the vote form and the dashboard never break
because of the AI helper.
"""

from typing import Optional, Sequence
import logging

from django.conf import settings # pyright: ignore[reportMissingModuleSource]
from openai import OpenAI # pyright: ignore[reportMissingImports]

from .aggregation import build_summary_dataset
from .catalog import AwardCatalog, CATALOG
from .records import NominationRecord

logger = logging.getLogger(__name__)

DRAFT_UNCONFIGURED = "Please provide a reason manually (AI service configuration missing)."
DRAFT_EMPTY = "Nomination generated."
DRAFT_FAILED = "Could not generate nomination automatically. Please try again."

SUMMARY_UNCONFIGURED = "Analytics AI unavailable."
SUMMARY_EMPTY = "Analysis complete."
SUMMARY_FAILED = "Unable to generate AI summary at this time."


def get_client() -> Optional[OpenAI]:
    """Build a client from settings, or None when no API key is configured."""
    api_key = settings.TEXTGEN_API_KEY
    if not api_key:
        logger.warning("Text generation API key not found; AI features disabled.")
        return None
    return OpenAI(
        api_key=api_key,
        base_url=settings.TEXTGEN_BASE_URL,
        timeout=settings.TEXTGEN_TIMEOUT,
    )


def _complete(client: OpenAI, prompt: str) -> str:
    response = client.chat.completions.create(
        model=settings.TEXTGEN_MODEL,
        messages=[{"role": "user", "content": prompt}],
    )
    if not response.choices:
        return ''
    return (response.choices[0].message.content or '').strip()


def generate_nomination_draft(nominee_name: str, category_title: str, keywords: str) -> str:
    """
    Draft a short nomination narrative.

    Args:
        nominee_name: Who is being recognized
        category_title: Title of the selected award category
        keywords: Free-text highlights supplied by the nominator

    Returns:
        Generated text, or a fallback message (never raises)
    """
    client = get_client()
    if client is None:
        return DRAFT_UNCONFIGURED

    prompt = (
        f"Write a short, professional, and inspiring award nomination (max 50 words) "
        f"for {nominee_name} in the category of \"{category_title}\". "
        f"Key highlights: {keywords}. Focus on impact and values."
    )
    try:
        return _complete(client, prompt) or DRAFT_EMPTY
    except Exception as e:
        logger.error(f"Text generation error (draft): {str(e)}")
        return DRAFT_FAILED


def generate_summary(records: Sequence[NominationRecord], catalog: AwardCatalog = CATALOG) -> str:
    """
    Summarize who is leading and which category is most competitive.

    Returns:
        Two-sentence summary, or a fallback message (never raises)
    """
    client = get_client()
    if client is None:
        return SUMMARY_UNCONFIGURED

    prompt = (
        "Analyze the following voting data for the peer recognition platform.\n"
        "Data:\n"
        f"{build_summary_dataset(records, catalog)}\n\n"
        "Provide a 2-sentence summary of who is leading and which category is most competitive."
    )
    try:
        return _complete(client, prompt) or SUMMARY_EMPTY
    except Exception as e:
        logger.error(f"Text generation error (summary): {str(e)}")
        return SUMMARY_FAILED
