"""HTTP client for the SurrealDB database service."""

import json
import logging
import re
from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional

import requests
from requests.adapters import HTTPAdapter
from urllib3.util.retry import Retry

from ..models.errors import AuthError, NetworkError, QueryError
from ..models.record import Record, escape_ident
from ..models.settings import ConnectionSettings

logger = logging.getLogger(__name__)

_PARAM_NAME = re.compile(r"^[A-Za-z_][A-Za-z0-9_]*$")


@dataclass
class QueryResponse:
    """Outcome of a statement batch: rows of the last statement plus any errors."""
    rows: Any = None
    errors: List[str] = field(default_factory=list)

    @property
    def ok(self) -> bool:
        return not self.errors


class SurrealConnection:
    """
    Connection to a SurrealDB server over its HTTP API.

    Handles:
    - Root sign-in and bearer token reuse
    - Namespace/database selection via headers
    - Parameter binding through LET statements
    - Connect-level retries

    A connection is cheap to clone; each clone owns its own
    requests session so clones can be used from separate threads.
    """

    def __init__(
        self,
        settings: ConnectionSettings,
        token: Optional[str] = None,
        session: Optional[requests.Session] = None
    ):
        """
        Initialize the connection.

        Args:
            settings: Endpoint, credentials and namespace/database
            token: Bearer token from a previous sign-in
            session: Custom requests session
        """
        self.settings = settings
        self._token = token
        self._session = self._create_session(session)
        self._apply_auth()

    @classmethod
    def connect(cls, settings: ConnectionSettings) -> "SurrealConnection":
        """Create a connection and sign in."""
        connection = cls(settings)
        try:
            connection.signin()
        except Exception:
            connection.close()
            raise
        logger.info(
            f"Connected to {settings.endpoint} (ns={settings.namespace}, db={settings.database})"
        )
        return connection

    def _create_session(self, session: Optional[requests.Session] = None) -> requests.Session:
        """Create a requests session with retry logic."""
        session = session or requests.Session()

        # Only connection failures are retried; statements are not idempotent
        retries = Retry(
            total=self.settings.max_retries,
            connect=self.settings.max_retries,
            read=0,
            backoff_factor=0.5,
        )

        adapter = HTTPAdapter(max_retries=retries)
        session.mount("https://", adapter)
        session.mount("http://", adapter)

        session.headers["Accept"] = "application/json"
        session.headers["Surreal-NS"] = self.settings.namespace
        session.headers["Surreal-DB"] = self.settings.database
        # Legacy header names for 1.x servers
        session.headers["NS"] = self.settings.namespace
        session.headers["DB"] = self.settings.database

        return session

    def _apply_auth(self) -> None:
        if self._token:
            self._session.auth = None
            self._session.headers["Authorization"] = f"Bearer {self._token}"
        else:
            self._session.auth = (self.settings.username, self.settings.password)

    def _post(self, path: str, **kwargs) -> requests.Response:
        url = f"{self.settings.endpoint}{path}"
        try:
            return self._session.post(url, timeout=self.settings.timeout, **kwargs)
        except requests.exceptions.RequestException as e:
            raise NetworkError(f"Request to {url} failed: {e}", {"url": url}) from e

    def signin(self) -> None:
        """Sign in with the configured root credentials."""
        response = self._post(
            "/signin",
            json={"user": self.settings.username, "pass": self.settings.password},
        )

        if response.status_code in (401, 403):
            raise AuthError(
                f"Sign-in rejected for user {self.settings.username}",
                {"status_code": response.status_code},
            )
        if response.status_code >= 400:
            raise NetworkError(
                f"Sign-in failed: HTTP {response.status_code} - {response.text}",
                {"status_code": response.status_code},
            )

        try:
            payload = response.json()
        except ValueError:
            payload = {}

        self._token = payload.get("token") if isinstance(payload, dict) else None
        if not self._token:
            logger.debug("No token in sign-in response, using basic auth")
        self._apply_auth()

    def execute(
        self,
        statement: str,
        bindings: Optional[Dict[str, Any]] = None
    ) -> QueryResponse:
        """
        Execute a statement with named parameter bindings.

        Each binding becomes a ``LET $name = <json>;`` statement sent in the
        same request, so values never need to be spliced into the
        statement text.

        Args:
            statement: SurrealQL statement referencing ``$name`` parameters
            bindings: Parameter name -> JSON-compatible value

        Returns:
            QueryResponse with the last statement's result and all
            statement-level errors
        """
        lines = []
        for name, value in (bindings or {}).items():
            if not _PARAM_NAME.match(name):
                raise ValueError(f"Invalid parameter name: {name}")
            lines.append(f"LET ${name} = {json.dumps(value, ensure_ascii=False)};")
        lines.append(statement)
        body = "\n".join(lines)

        logger.debug(f"Executing: {statement}")
        response = self._post(
            "/sql",
            data=body.encode("utf-8"),
            headers={"Content-Type": "text/plain; charset=utf-8"},
        )

        if response.status_code in (401, 403):
            raise AuthError(
                f"Not authorized: HTTP {response.status_code}",
                {"status_code": response.status_code},
            )
        if response.status_code == 400:
            # Parse errors and the like come back as a 400 with details
            return QueryResponse(rows=[], errors=[self._error_message(response)])
        if response.status_code >= 400:
            raise NetworkError(
                f"HTTP {response.status_code} - {response.text}",
                {"status_code": response.status_code},
            )

        try:
            results = response.json()
        except ValueError as e:
            raise NetworkError(f"Invalid JSON response: {e}") from e

        if not isinstance(results, list):
            results = [results]

        errors = []
        for entry in results:
            if isinstance(entry, dict) and entry.get("status", "OK") != "OK":
                errors.append(str(entry.get("result") or entry.get("detail") or "unknown error"))

        last = results[-1] if results else {}
        rows = last.get("result") if isinstance(last, dict) else None

        return QueryResponse(rows=rows, errors=errors)

    def _error_message(self, response: requests.Response) -> str:
        try:
            payload = response.json()
        except ValueError:
            return response.text
        if isinstance(payload, dict):
            return str(
                payload.get("information")
                or payload.get("description")
                or payload.get("details")
                or payload
            )
        return str(payload)

    def select(
        self,
        table: str,
        start: int = 0,
        limit: Optional[int] = None
    ) -> List[Record]:
        """
        Select a window of records from a table.

        Args:
            table: Table name
            start: Number of records to skip
            limit: Maximum records to return (None for no limit)

        Returns:
            List of records
        """
        statement = "SELECT * FROM type::table($table)"
        if limit is not None:
            statement += f" LIMIT {int(limit)}"
        if start:
            statement += f" START {int(start)}"
        statement += ";"

        response = self.execute(statement, {"table": table})
        if not response.ok:
            raise QueryError(
                f"Select from {table} failed: {'; '.join(response.errors)}",
                {"table": table},
            )

        rows = response.rows or []
        if not isinstance(rows, list):
            rows = [rows]
        return rows

    def schema_info(self, table: str) -> Dict[str, Any]:
        """Get table metadata (fields, indexes, events) from INFO FOR TABLE."""
        response = self.execute(f"INFO FOR TABLE {escape_ident(table)};")
        if not response.ok:
            raise QueryError(
                f"Schema lookup for {table} failed: {'; '.join(response.errors)}",
                {"table": table},
            )
        return response.rows if isinstance(response.rows, dict) else {}

    def clone(self) -> "SurrealConnection":
        """Create a connection sharing settings and token, with its own session."""
        return SurrealConnection(self.settings, token=self._token)

    def close(self) -> None:
        self._session.close()

    def __enter__(self) -> "SurrealConnection":
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        self.close()
