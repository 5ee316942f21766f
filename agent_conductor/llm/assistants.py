"""
Client for the OpenAI Assistants API (assistants, threads, messages and runs).
"""

from __future__ import annotations

import logging
import os
import time
from typing import Any, Dict, List, Mapping, Optional, Tuple

import requests

from .base import LLMError
from .providers import get_provider_spec

LOGGER = logging.getLogger(__name__)

ASSISTANTS_BETA = "assistants=v2"

# Run states that will never reach "completed" on their own.
FAILED_RUN_STATUSES = frozenset({"failed", "cancelled", "cancelling", "expired", "incomplete", "requires_action"})


class AssistantsClient:
    """
    Thin wrapper around the Assistants REST endpoints.

    Runs are asynchronous on the server side, so ``wait_for_run`` polls every
    ``poll_interval`` seconds and gives up after ``run_timeout`` seconds.
    """

    def __init__(
        self,
        *,
        base_url: str,
        api_key_env: str = "OPENAI_API_KEY",
        api_key: Optional[str] = None,
        organization: Optional[str] = None,
        timeout: float = 30.0,
        poll_interval: float = 1.0,
        run_timeout: float = 60.0,
    ) -> None:
        if poll_interval <= 0 or run_timeout <= 0:
            raise ValueError("poll_interval and run_timeout must be positive")
        self.base_url = base_url.rstrip("/")
        self.api_key = api_key if api_key is not None else os.getenv(api_key_env)
        if not self.api_key:
            raise ValueError(
                f"API key is required. Provide via constructor or set the {api_key_env} environment variable."
            )
        self.timeout = timeout
        self.poll_interval = poll_interval
        self.run_timeout = run_timeout
        self.headers = {
            "Authorization": f"Bearer {self.api_key}",
            "Content-Type": "application/json",
            "OpenAI-Beta": ASSISTANTS_BETA,
        }
        if organization:
            self.headers["OpenAI-Organization"] = organization

    def _request(
        self,
        method: str,
        path: str,
        *,
        json: Optional[Mapping[str, Any]] = None,
        params: Optional[Mapping[str, Any]] = None,
    ) -> Dict[str, Any]:
        url = f"{self.base_url}/{path.lstrip('/')}"
        LOGGER.debug("%s %s", method, url)
        try:
            response = requests.request(
                method,
                url,
                json=json,
                params=params,
                headers=self.headers,
                timeout=self.timeout,
            )
        except requests.RequestException as exc:
            raise LLMError(f"Assistants request failed: {exc}") from exc
        if response.status_code >= 400:
            raise LLMError(f"Assistants request failed ({response.status_code}): {response.text}")
        try:
            body = response.json()
        except ValueError as exc:
            raise LLMError(f"Assistants API returned a non-JSON body: {response.text}") from exc
        if not isinstance(body, dict):
            raise LLMError(f"Malformed response structure: {body}")
        return body

    @staticmethod
    def _id_of(body: Mapping[str, Any], what: str) -> str:
        object_id = body.get("id")
        if not object_id:
            raise LLMError(f"Assistants API returned a {what} without an id: {body}")
        return str(object_id)

    def find_assistant_by_name(self, name: str) -> Optional[str]:
        """Return the id of the first assistant called ``name``, following pagination."""
        params: Dict[str, Any] = {"limit": 100}
        while True:
            page = self._request("GET", "assistants", params=params)
            data = page.get("data") or []
            for assistant in data:
                if assistant.get("name") == name:
                    return self._id_of(assistant, "assistant")
            if not page.get("has_more") or not data:
                return None
            params = {"limit": 100, "after": self._id_of(data[-1], "assistant")}

    def create_assistant(self, name: str, instructions: Optional[str], model: str) -> str:
        body = self._request(
            "POST",
            "assistants",
            json={"name": name, "instructions": instructions, "model": model},
        )
        return self._id_of(body, "assistant")

    def get_or_create_assistant(self, name: str, instructions: Optional[str], model: str) -> Tuple[str, bool]:
        """Return ``(assistant_id, created)``; an existing assistant is reused unchanged."""
        existing = self.find_assistant_by_name(name)
        if existing:
            LOGGER.info("Reusing assistant %s (%s)", name, existing)
            return existing, False
        assistant_id = self.create_assistant(name, instructions, model)
        LOGGER.info("Created assistant %s (%s)", name, assistant_id)
        return assistant_id, True

    def create_thread(self) -> str:
        return self._id_of(self._request("POST", "threads", json={}), "thread")

    def add_message(self, thread_id: str, content: str) -> Dict[str, Any]:
        return self._request("POST", f"threads/{thread_id}/messages", json={"role": "user", "content": content})

    def create_run(self, thread_id: str, assistant_id: str) -> Dict[str, Any]:
        return self._request("POST", f"threads/{thread_id}/runs", json={"assistant_id": assistant_id})

    def retrieve_run(self, thread_id: str, run_id: str) -> Dict[str, Any]:
        return self._request("GET", f"threads/{thread_id}/runs/{run_id}")

    def wait_for_run(self, thread_id: str, run: Mapping[str, Any]) -> Dict[str, Any]:
        """Poll ``run`` until it completes. Failure states and the deadline raise ``LLMError``."""
        run_id = self._id_of(run, "run")
        current = dict(run)
        deadline = time.monotonic() + self.run_timeout
        while True:
            status = current.get("status")
            if status == "completed":
                return current
            if status in FAILED_RUN_STATUSES:
                raise LLMError(f"Run {run_id} ended with status '{status}': {current.get('last_error')}")
            if time.monotonic() >= deadline:
                raise LLMError(f"Run {run_id} did not complete within {self.run_timeout:.0f} seconds")
            time.sleep(self.poll_interval)
            current = self.retrieve_run(thread_id, run_id)
            LOGGER.debug("Run %s status: %s", run_id, current.get("status"))

    def list_messages(self, thread_id: str) -> List[Dict[str, Any]]:
        return list(self._request("GET", f"threads/{thread_id}/messages").get("data") or [])

    def run_and_wait(self, thread_id: str, assistant_id: str, prompt: str) -> List[Dict[str, Any]]:
        """Post ``prompt`` to the thread, run the assistant on it and return the thread's messages."""
        self.add_message(thread_id, prompt)
        run = self.wait_for_run(thread_id, self.create_run(thread_id, assistant_id))
        LOGGER.info("Run %s completed on thread %s", run.get("id"), thread_id)
        return self.list_messages(thread_id)


def create_assistants_client(
    *,
    api_key: Optional[str] = None,
    base_url: Optional[str] = None,
    organization: Optional[str] = None,
    timeout: float = 30.0,
    poll_interval: float = 1.0,
    run_timeout: float = 60.0,
) -> AssistantsClient:
    """
    Build a client against the ``openai`` provider's endpoint and credentials.
    """

    spec = get_provider_spec("openai")
    return AssistantsClient(
        base_url=spec.resolve_base_url(base_url),
        api_key_env=spec.api_key_env,
        api_key=api_key,
        organization=spec.resolve_organization(organization),
        timeout=timeout,
        poll_interval=poll_interval,
        run_timeout=run_timeout,
    )
