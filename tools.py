import os
import logging
import requests
from google.auth.exceptions import GoogleAuthError
from google.auth.transport.requests import Request
from google.oauth2.credentials import Credentials
from google_auth_oauthlib.flow import InstalledAppFlow
from googleapiclient.discovery import build
from oauthlib.oauth2.rfc6749.errors import OAuth2Error

logger = logging.getLogger(__name__)

AUTH_PROMPT = (
    "Opening browser for authorization...\n"
    "If it does not open, please visit:\n{url}\n"
)


class TokenError(Exception):
    pass


def get_user_creds(
    scopes,
    credentials_file: str = "client_secret.json",
    token_file: str = "token.json",
    port: int = 8080,
    timeout_seconds: int = 300,
    access_type: str = "offline",
    prompt: str = "consent",
    redirect_uri_trailing_slash: bool = True,
):
    """
    Load cached credentials, refreshing or re-authorizing when needed.

    The token is written back to token_file (mode 0600) whenever it changes.
    Raises FileNotFoundError when the client secrets file is missing,
    ValueError when it is malformed and TokenError when no token could be
    obtained.
    """
    if isinstance(scopes, str):
        scopes = [scopes]

    creds = None
    if os.path.exists(token_file):
        try:
            creds = Credentials.from_authorized_user_file(token_file, scopes)
        except ValueError as e:
            logger.warning("Ignoring unreadable token file %s: %s", token_file, e)

    if creds and creds.valid:
        return creds

    if creds and creds.expired and creds.refresh_token:
        logger.debug("Refreshing expired token from %s", token_file)
        try:
            creds.refresh(Request())
        except GoogleAuthError as e:
            raise TokenError(f"token refresh failed: {e}") from e
    else:
        if not os.path.exists(credentials_file):
            raise FileNotFoundError(f"Missing client secret file: {credentials_file}")
        flow = InstalledAppFlow.from_client_secrets_file(credentials_file, scopes)
        try:
            creds = flow.run_local_server(
                port=port,
                authorization_prompt_message=AUTH_PROMPT,
                success_message="Authorization successful! You can close this window.",
                timeout_seconds=timeout_seconds,
                redirect_uri_trailing_slash=redirect_uri_trailing_slash,
                access_type=access_type,
                prompt=prompt,
            )
        except (OAuth2Error, requests.exceptions.RequestException) as e:
            raise TokenError(f"code exchange failed: {e}") from e
        except OSError as e:
            raise TokenError(f"could not listen for the authorization callback on port {port}: {e}") from e
        except AttributeError as e:
            # a timed-out listener leaves last_request_uri as None for the https rewrite
            if e.name != "replace" or e.obj is not None:
                raise
            raise TokenError(f"no authorization received within {timeout_seconds}s") from e

    try:
        save_token(token_file, creds)
    except OSError as e:
        raise TokenError(f"unable to cache token in {token_file}: {e}") from e
    return creds


def save_token(token_file, creds):
    directory = os.path.dirname(token_file)
    if directory:
        os.makedirs(directory, exist_ok=True)
    fd = os.open(token_file, os.O_WRONLY | os.O_CREAT | os.O_TRUNC, 0o600)
    with os.fdopen(fd, "w") as f:
        f.write(creds.to_json())
    logger.debug("Saved token to %s", token_file)


def get_google_service(
    api_name,
    api_version,
    scopes,
    credentials_file: str = "client_secret.json",
    token_file: str = "token.json",
    port: int = 8080,
    timeout_seconds: int = 300,
):
    creds = get_user_creds(
        scopes,
        credentials_file=credentials_file,
        token_file=token_file,
        port=port,
        timeout_seconds=timeout_seconds,
    )
    return build(api_name, api_version, credentials=creds, cache_discovery=False)
