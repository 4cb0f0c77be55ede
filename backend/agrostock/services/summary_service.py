# Overview: Service-layer AI business summary; Gemini via LangChain with a fixed offline fallback.

"""
AI Business Summary

WHY: The dashboard shows a short narrative of business health. The model call
is the only slow, failure-prone step in the system, so it never raises: any
failure (missing key, network, timeout, malformed response) degrades to
OFFLINE_MESSAGE.

STALE RESULTS: Each refresh takes a new generation number from the board.
A result is published only while its generation is still the latest, so a
slow response to an old snapshot can never overwrite a newer summary.
"""

from __future__ import annotations

import hashlib
import json
import threading

from flask import current_app
from langchain_core.messages import HumanMessage
from langchain_google_genai import ChatGoogleGenerativeAI


LOADING_MESSAGE = "Loading AI business insights..."
OFFLINE_MESSAGE = "Intelligence services are currently offline. Please check back later."
EMPTY_SUMMARY_MESSAGE = "Unable to generate AI summary at this time."

PROMPT_TEMPLATE = """
You are an expert agricultural business analyst for Olatunbosun Agro Stock Manager.
Based on the following data, provide a concise (2-3 paragraph) executive summary of business health,
identifying any risks (like low stock) and performance highlights.

Stock Inventory: {products}
Recent Sales: {sales}

Focus on:
1. Critical stock levels.
2. Revenue trends.
3. Strategic recommendations for the store manager.
"""


def build_prompt(products: list[dict], sales: list[dict]) -> str:
    return PROMPT_TEMPLATE.format(
        products=json.dumps(products, default=str),
        sales=json.dumps(sales, default=str),
    )


def snapshot_fingerprint(products: list[dict], sales: list[dict]) -> str:
    payload = json.dumps({"products": products, "sales": sales}, sort_keys=True, default=str)
    return hashlib.sha256(payload.encode("utf-8")).hexdigest()


def build_llm() -> ChatGoogleGenerativeAI | None:
    """Gemini chat model from app config, or None when no API key is configured."""
    config = current_app.config
    api_key = config.get("GOOGLE_API_KEY")
    if not api_key:
        return None
    return ChatGoogleGenerativeAI(
        model=config["AI_SUMMARY_MODEL"],
        google_api_key=api_key,
        temperature=config["AI_SUMMARY_TEMPERATURE"],
        timeout=config["AI_SUMMARY_TIMEOUT"],
        max_retries=0,
    )


def _response_text(response) -> str:
    content = getattr(response, "content", response)
    if isinstance(content, list):
        # Multi-part responses carry text blocks
        parts = []
        for part in content:
            if isinstance(part, str):
                parts.append(part)
            elif isinstance(part, dict) and part.get("type") == "text":
                parts.append(part.get("text") or "")
        content = "".join(parts)
    if content is None:
        return ""
    if not isinstance(content, str):
        raise TypeError(f"Unexpected summary content type: {type(content).__name__}")
    return content.strip()


def generate_summary(products: list[dict], sales: list[dict], llm=None) -> str:
    """
    Ask the model for an executive summary of the given snapshot.

    Args:
        products: Product dicts (see Product.to_dict)
        sales: Sale dicts (see Sale.to_dict)
        llm: Chat model exposing invoke(messages); built from config when omitted

    Returns:
        The summary text, EMPTY_SUMMARY_MESSAGE for an empty response, or
        OFFLINE_MESSAGE on any failure. Never raises. No retries.
    """
    prompt = build_prompt(products, sales)
    try:
        if llm is None:
            llm = build_llm()
            if llm is None:
                current_app.logger.warning("AI summary unavailable: GOOGLE_API_KEY is not configured")
                return OFFLINE_MESSAGE
        response = llm.invoke([HumanMessage(content=prompt)])
        text = _response_text(response)
    except Exception as exc:
        current_app.logger.warning("AI summary failed: %s", exc)
        return OFFLINE_MESSAGE

    return text or EMPTY_SUMMARY_MESSAGE


class SummaryBoard:
    """
    Latest AI summary plus the bookkeeping that discards stale results.

    Thread-safe: refreshes may complete on worker threads in any order.
    """

    def __init__(self):
        self._lock = threading.Lock()
        self._generation = 0
        self._text = LOADING_MESSAGE
        self._fingerprint = None

    @property
    def text(self) -> str:
        with self._lock:
            return self._text

    @property
    def generation(self) -> int:
        with self._lock:
            return self._generation

    def issue(self, fingerprint: str | None = None) -> int:
        """Start a new refresh; every earlier generation becomes stale."""
        with self._lock:
            self._generation += 1
            self._fingerprint = fingerprint
            return self._generation

    def publish(self, generation: int, text: str) -> bool:
        """Apply a result only if it belongs to the latest generation."""
        with self._lock:
            if generation != self._generation:
                return False
            self._text = text
            return True

    def _begin(self, products: list[dict], sales: list[dict], force: bool) -> int | None:
        fingerprint = snapshot_fingerprint(products, sales)
        with self._lock:
            if not force and fingerprint == self._fingerprint:
                return None
            self._generation += 1
            self._fingerprint = fingerprint
            return self._generation

    def _complete(self, generation: int, products: list[dict], sales: list[dict], llm) -> str:
        text = generate_summary(products, sales, llm=llm)
        if not self.publish(generation, text):
            current_app.logger.info("Discarded stale AI summary (generation %s)", generation)
        return self.text

    def refresh(self, products: list[dict], sales: list[dict], *, force: bool = False, llm=None) -> str:
        """
        Regenerate the summary when the snapshot changed (or when forced).

        Returns the board text after the refresh.
        """
        generation = self._begin(products, sales, force)
        if generation is None:
            return self.text
        return self._complete(generation, products, sales, llm)

    def submit_refresh(self, executor, products: list[dict], sales: list[dict], *, force: bool = False, llm=None):
        """
        Like refresh(), but the model call runs on an executor worker.

        The generation is taken on the calling thread, so submission order
        decides which result wins regardless of completion order. Returns the
        executor's Future, or None when the snapshot is unchanged.
        """
        generation = self._begin(products, sales, force)
        if generation is None:
            return None
        app = current_app._get_current_object()

        def _work():
            with app.app_context():
                return self._complete(generation, products, sales, llm)

        return executor.submit(_work)


def get_summary_board() -> SummaryBoard:
    return current_app.extensions["agrostock_summary"]
