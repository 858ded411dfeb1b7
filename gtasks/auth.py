import json
import logging
import os
from pathlib import Path

# Allow Google to return broader scopes than requested (e.g. from prior grants)
os.environ["OAUTHLIB_RELAX_TOKEN_SCOPE"] = "1"

from google.auth.exceptions import RefreshError, TransportError
from google.auth.transport.requests import Request
from google.oauth2.credentials import Credentials
from google_auth_oauthlib.flow import InstalledAppFlow

from gtasks.config import Settings
from gtasks.exceptions import AuthenticationError, ConfigurationError

logger = logging.getLogger(__name__)

TASKS_SCOPE = "https://www.googleapis.com/auth/tasks"
SCOPES = [TASKS_SCOPE]

# Loopback redirect; the browser lands on an unreachable page whose URL holds the code
CONSOLE_REDIRECT_URI = "http://localhost"


class TokenStore:
    """Reads/writes the OAuth token of the single authorized user to a JSON file."""

    def __init__(self, path: Path):
        self.path = path

    def load(self) -> dict | None:
        if not self.path.exists():
            return None
        return json.loads(self.path.read_text())

    def save(self, token_data: dict) -> None:
        logger.info("Saving credential file to %s", self.path)
        self.path.write_text(json.dumps(token_data, indent=2))
        self.path.chmod(0o600)

    def clear(self) -> None:
        self.path.unlink(missing_ok=True)


def _create_flow(settings: Settings) -> InstalledAppFlow:
    if not settings.client_secret_file.exists():
        raise ConfigurationError(
            f"OAuth client secret file not found at {settings.client_secret_file}. "
            "Download it from Google Cloud Console."
        )
    try:
        return InstalledAppFlow.from_client_secrets_file(str(settings.client_secret_file), scopes=SCOPES)
    except ValueError as e:
        raise ConfigurationError(f"Unable to parse client secret file {settings.client_secret_file}: {e}") from e


def _authorize_on_console(flow: InstalledAppFlow, prompt=input) -> Credentials:
    flow.redirect_uri = CONSOLE_REDIRECT_URI
    auth_url, _ = flow.authorization_url(access_type="offline", prompt="consent")
    print(f"Go to the following link in your browser then type the authorization code:\n{auth_url}")
    code = prompt("Authorization code: ").strip()
    if not code:
        raise AuthenticationError("No authorization code entered.")
    try:
        flow.fetch_token(code=code)
    except Exception as e:
        raise AuthenticationError(f"Unable to retrieve token from web: {e}") from e
    return flow.credentials


def _require_write_scope(creds: Credentials) -> None:
    granted = creds.granted_scopes or creds.scopes or []
    if TASKS_SCOPE not in granted:
        raise ConfigurationError(
            f"Credentials lack the {TASKS_SCOPE} scope needed to move tasks. "
            "Delete the token file and run again to re-authorize."
        )


def authorize(settings: Settings, store: TokenStore, prompt=input) -> Credentials:
    """Run the interactive authorization-code flow and persist the token."""
    flow = _create_flow(settings)
    if settings.oauth_local_server:
        creds = flow.run_local_server(port=0, access_type="offline", prompt="consent")
    else:
        creds = _authorize_on_console(flow, prompt)
    _require_write_scope(creds)
    store.save(json.loads(creds.to_json()))
    print(f"Saved credential file to: {store.path}")
    return creds


def get_credentials(settings: Settings, store: TokenStore, prompt=input) -> Credentials:
    """Load credentials from the token store, refreshing or authorizing as needed."""
    try:
        token_data = store.load()
        # No scopes passed so the stored grant is what gets checked
        creds = Credentials.from_authorized_user_info(token_data) if token_data else None
    except ValueError as e:
        raise ConfigurationError(f"Malformed token file {store.path}: {e}") from e
    if creds is not None:
        _require_write_scope(creds)
        if creds.valid:
            return creds
        if creds.expired and creds.refresh_token:
            logger.info("Refreshing expired access token")
            try:
                creds.refresh(Request())
            except (RefreshError, TransportError) as e:
                raise AuthenticationError(
                    f"Unable to refresh token: {e}. Delete {store.path} and run again to re-authorize."
                ) from e
            store.save(json.loads(creds.to_json()))
            return creds
    logger.info("No usable token in %s, starting authorization", store.path)
    return authorize(settings, store, prompt)
