from __future__ import annotations
import logging
import httpx
from typing import Any, Dict, Optional
from .settings import settings

logger = logging.getLogger(__name__)


class LLMError(RuntimeError):
	"""The text-generation service failed or answered something unusable."""


class LLMClient:
	"""Async client for the Gemini REST API with an optional OpenRouter fallback."""

	def __init__(
		self,
		api_key: Optional[str] = None,
		*,
		base_url: Optional[str] = None,
		model: Optional[str] = None,
		transport: Optional[httpx.AsyncBaseTransport] = None,
	) -> None:
		self.api_key = api_key or settings.llm_api_key
		if not self.api_key:
			raise LLMError("GEMINI_API_KEY is not configured")
		self.model = model or settings.llm_model
		self.provider = settings.llm_provider
		if self.provider == "vertex":
			region = settings.vertex_region
			project = settings.vertex_project or "placeholder-project"
			# Vertex AI Generative REST endpoint (API key via header)
			self.base_url = base_url or (
				f"https://{region}-aiplatform.googleapis.com/v1/projects/{project}/locations/{region}/publishers/google/models/{self.model}:generateContent"
			)
			self._auth_in_query = False
		else:
			# Google AI Studio (Generative Language API)
			self.base_url = base_url or f"https://generativelanguage.googleapis.com/v1beta/models/{self.model}:generateContent"
			self._auth_in_query = True
		timeout = settings.llm_timeout_seconds
		self._client = httpx.AsyncClient(timeout=timeout, transport=transport)
		self._fallback_client: Optional[httpx.AsyncClient] = None
		self._openrouter_api_key = settings.openrouter_api_key
		if self._openrouter_api_key:
			self._fallback_client = httpx.AsyncClient(timeout=timeout, transport=transport)

	async def __aenter__(self) -> "LLMClient":
		return self

	async def __aexit__(self, *exc_info) -> None:
		await self.aclose()

	async def generate(self, prompt: str, *, max_tokens: Optional[int] = None) -> str:
		payload: Dict[str, Any] = {
			"contents": [{"role": "user", "parts": [{"text": prompt}]}],
			"generationConfig": {"maxOutputTokens": max_tokens or settings.llm_max_tokens},
		}
		params: Dict[str, Any] = {}
		headers: Dict[str, str] = {}
		if self._auth_in_query:
			params["key"] = self.api_key
		else:
			headers["x-goog-api-key"] = self.api_key
		try:
			r = await self._client.post(self.base_url, params=params, headers=headers, json=payload)
			r.raise_for_status()
			return self._extract_gemini_text(r)
		except (httpx.HTTPError, LLMError) as err:
			if self._fallback_client is None:
				raise LLMError(f"Gemini call failed: {err}") from err
			logger.warning("Gemini call failed (%s); trying OpenRouter fallback", err)
			return await self._fallback_generate(prompt, err, max_tokens or settings.llm_max_tokens)

	@staticmethod
	def _extract_gemini_text(r: httpx.Response) -> str:
		try:
			data = r.json()
			parts = data["candidates"][0]["content"]["parts"]
		except (ValueError, KeyError, IndexError, TypeError) as err:
			raise LLMError(f"Unexpected Gemini response: {r.text[:500]}") from err
		text = "".join(p.get("text", "") for p in parts if isinstance(p, dict))
		if not text.strip():
			raise LLMError("Gemini returned an empty answer")
		return text

	async def _fallback_generate(self, prompt: str, primary_error: Exception, max_tokens: int) -> str:
		headers = {
			"Authorization": f"Bearer {self._openrouter_api_key}",
			"Content-Type": "application/json",
			"HTTP-Referer": settings.openrouter_referer,
			"X-Title": settings.openrouter_title,
		}
		payload: Dict[str, Any] = {
			"model": settings.openrouter_model,
			"messages": [{"role": "user", "content": prompt}],
			"max_tokens": max_tokens,
		}
		try:
			r = await self._fallback_client.post(settings.openrouter_base_url, headers=headers, json=payload)
			r.raise_for_status()
			return r.json()["choices"][0]["message"]["content"]
		except (httpx.HTTPError, ValueError, KeyError, IndexError, TypeError) as fallback_err:
			raise LLMError(
				f"Gemini primary call failed ({primary_error}); fallback via OpenRouter also failed"
			) from fallback_err

	async def aclose(self) -> None:
		await self._client.aclose()
		if self._fallback_client is not None:
			await self._fallback_client.aclose()
