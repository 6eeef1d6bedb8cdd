"""Peewee-backed key/value store for reader preferences."""

from __future__ import annotations

from contextlib import contextmanager
from pathlib import Path
from typing import Iterator

from peewee import (
    CharField,
    DoesNotExist,
    Model,
    PeeweeException,
    SqliteDatabase,
    TextField,
)

DB_FILENAME = "preferences.sqlite3"
TABLE_PREFERENCES = "preferences"


class PreferenceError(RuntimeError):
    """Raised when the preference database cannot be used."""


class PreferenceDatabase(SqliteDatabase):
    """SqliteDatabase configured for per-call connection lifetimes."""

    def __init__(self, path: Path) -> None:
        super().__init__(str(path), check_same_thread=False)


class PreferenceModel(Model):
    """Base model bound to the preference database."""

    class Meta:
        database = SqliteDatabase(None)


class Preference(PreferenceModel):
    key = CharField(primary_key=True)
    value = TextField(null=False)

    class Meta:
        table_name = TABLE_PREFERENCES


class PreferenceStore:
    """Durable string preferences keyed by a fixed name."""

    def __init__(self, path: Path | str) -> None:
        self.path = Path(path)
        self._database = PreferenceDatabase(self.path)

    def initialize(self) -> None:
        try:
            self.path.parent.mkdir(parents=True, exist_ok=True)
        except OSError as exc:  # pragma: no cover - filesystem failures are rare
            raise PreferenceError(
                f"Failed to create preference directory: {exc}"
            ) from exc

        with self._binding() as model:
            try:
                model.create_table(safe=True)
            except PeeweeException as exc:
                raise PreferenceError(
                    f"Failed to initialize preferences: {exc}"
                ) from exc

    def get(self, key: str) -> str | None:
        with self._binding() as model:
            try:
                return model.get_by_id(key).value
            except DoesNotExist:
                return None

    def set(self, key: str, value: str) -> None:
        with self._binding() as model:
            try:
                model.replace(key=key, value=value).execute()
            except PeeweeException as exc:
                raise PreferenceError(f"Failed to store '{key}': {exc}") from exc

    def delete(self, key: str) -> bool:
        """Forget ``key``; return True when something was removed."""

        with self._binding() as model:
            return model.delete().where(model.key == key).execute() > 0

    @contextmanager
    def _binding(self) -> Iterator[type[Preference]]:
        with self._database.connection_context():
            with Preference.bind_ctx(self._database):
                yield Preference
