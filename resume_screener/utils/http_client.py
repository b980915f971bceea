"""HTTP session with retry logic for language-model APIs."""

import logging

import requests
from requests.adapters import HTTPAdapter
from urllib3.util.retry import Retry

logger = logging.getLogger("resume_screener.http")

USER_AGENT = "resume-screener/1.0"


def create_session(max_retries: int = 3, backoff_factor: float = 1.0) -> requests.Session:
    """Create a requests session that retries throttled and failed POSTs."""
    session = requests.Session()

    retry_strategy = Retry(
        total=max_retries,
        backoff_factor=backoff_factor,
        status_forcelist=[429, 500, 502, 503, 504],
        allowed_methods=["GET", "POST"],
    )

    adapter = HTTPAdapter(max_retries=retry_strategy)
    session.mount("http://", adapter)
    session.mount("https://", adapter)

    session.headers.update({
        "User-Agent": USER_AGENT,
        "Accept": "application/json",
    })

    return session


def post_json(
    url: str,
    payload: dict,
    session: requests.Session | None = None,
    timeout: int = 60,
    **kwargs,
) -> dict:
    """POST a JSON body and return the decoded JSON response.

    Raises requests.RequestException (or ValueError for a non-JSON body) so the
    caller can decide how to surface the failure.
    """
    if session is None:
        session = create_session()

    response = session.post(url, json=payload, timeout=timeout, **kwargs)
    if not response.ok:
        logger.warning("HTTP %d from %s", response.status_code, url.split("?", 1)[0])
    response.raise_for_status()
    return response.json()
