"""Term library persistence store."""

from __future__ import annotations

import json
import logging
import os
import tempfile
import threading
from datetime import datetime, timezone
from pathlib import Path

from core.replacement.dictionary import Term, by_priority, normalize_dictionary

logger = logging.getLogger(__name__)


class TermStore:
    """Manages the persisted term library (one JSON file).

    The library is what a replacement request uses when it brings no
    dictionary of its own.  Terms are kept longest-original first.
    """

    def __init__(self, storage_dir: Path):
        """Initialize the term store.

        Args:
            storage_dir: Base directory for the library file
        """
        self.storage_dir = Path(storage_dir)
        self.storage_dir.mkdir(parents=True, exist_ok=True)
        self._terms_file = self.storage_dir / "terms.json"
        self._lock = threading.Lock()

        logger.info(f"Term store initialized at {self.storage_dir}")

    # ------------------------------------------------------------------
    # Internal I/O
    # ------------------------------------------------------------------

    def _read(self) -> list[Term]:
        if not self._terms_file.exists():
            return []
        try:
            with open(self._terms_file, "r", encoding="utf-8") as f:
                data = json.load(f)
        except json.JSONDecodeError as e:
            logger.error(f"Corrupted term library {self._terms_file}: {e}")
            return []
        try:
            return list(normalize_dictionary(
                (item["original"], item["substitute"]) for item in data.get("terms", [])
            ))
        except (AttributeError, KeyError, TypeError) as e:
            logger.error(f"Malformed term library {self._terms_file}: {e!r}")
            return []

    def _write(self, terms: list[Term]) -> None:
        """Write the library atomically (tmp file + rename)."""
        payload = {
            "saved_at": datetime.now(timezone.utc).isoformat(),
            "terms": [{"original": t.original, "substitute": t.substitute} for t in terms],
        }
        fd, tmp_path = tempfile.mkstemp(
            dir=str(self.storage_dir), suffix=".tmp", prefix="terms_"
        )
        try:
            with os.fdopen(fd, "w", encoding="utf-8") as f:
                json.dump(payload, f, indent=2, ensure_ascii=False)
            os.replace(tmp_path, str(self._terms_file))
        except BaseException:
            try:
                os.unlink(tmp_path)
            except OSError:
                pass
            raise

    # ------------------------------------------------------------------
    # Public API
    # ------------------------------------------------------------------

    def load_terms(self) -> list[Term]:
        """Return the library, longest original first."""
        with self._lock:
            return self._read()

    def count(self) -> int:
        return len(self.load_terms())

    def replace_terms(self, terms) -> int:
        """Replace the whole library with *terms*; returns the stored count.

        A later duplicate of an original overrides an earlier one.
        """
        latest: dict[str, str] = {}
        for term in normalize_dictionary(terms):
            latest[term.original] = term.substitute
        ordered = by_priority(Term(o, s) for o, s in latest.items())
        with self._lock:
            self._write(ordered)
        logger.info(f"Term library replaced with {len(ordered)} term(s)")
        return len(ordered)

    def add_term(self, original: str, substitute: str) -> bool:
        """Add one term, or overwrite the substitute of an existing one.

        Returns True when the original was not in the library before.
        """
        if not original:
            raise ValueError("Term original must not be empty")
        with self._lock:
            terms = self._read()
            created = True
            for i, t in enumerate(terms):
                if t.original == original:
                    terms[i] = Term(original, substitute)
                    created = False
                    break
            else:
                terms.append(Term(original, substitute))
            self._write(by_priority(terms))
        logger.info(f"{'Added' if created else 'Updated'} term ({len(original)} chars)")
        return created

    def clear(self) -> None:
        with self._lock:
            if self._terms_file.exists():
                self._terms_file.unlink()
        logger.info("Term library cleared")
