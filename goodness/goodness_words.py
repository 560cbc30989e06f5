#!/usr/bin/env python3
import requests

from goodness_errors import InputUnavailable

# =========================
# Word list sources
# =========================


def split_words(text: str):
    """Whitespace-delimited tokens, in order."""
    return text.split()


def load_words(path):
    """Read a local word list (any whitespace between words)."""
    try:
        with open(path, "r", encoding="utf-8", errors="replace") as f:
            words = split_words(f.read())
    except OSError as e:
        raise InputUnavailable(f"cannot read word list {path}: {e}") from e
    print(f"[words] Loaded {len(words)} words from {path}")
    return words


def fetch_words(url: str, timeout: float = 10):
    """
    Download a plain-text word list.
    No fallback list: any request failure raises InputUnavailable.
    """
    print(f"[words] Downloading word list from {url} ...")
    try:
        resp = requests.get(url, timeout=timeout)
        resp.raise_for_status()
    except requests.RequestException as e:
        raise InputUnavailable(f"cannot download word list from {url}: {e}") from e
    words = split_words(resp.text)
    print(f"[words] Loaded {len(words)} words from online source.")
    return words


def get_words(path=None, url=None):
    """URL wins over path when both are given."""
    if url:
        return fetch_words(url)
    if path is None:
        raise InputUnavailable("no word list path or URL given")
    return load_words(path)
