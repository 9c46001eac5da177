"""Email client for Gmail API integration with OAuth2 authentication."""

from asyncio import get_running_loop, wait_for
from base64 import urlsafe_b64encode
from email.message import EmailMessage
from email.utils import parseaddr
from logging import getLogger
from os import chmod
from pathlib import Path
from re import compile as re_compile
from socket import gaierror
from stat import S_IRUSR, S_IRWXG, S_IRWXO, S_IWUSR
from threading import Lock
from typing import Any, cast

from google.auth.transport.requests import Request
from google.oauth2.credentials import Credentials
from googleapiclient.discovery import Resource, build
from googleapiclient.errors import HttpError
from httplib2 import ServerNotFoundError

from itinerary_share.configs import DEFAULT_SENDER, file_logger, settings
from itinerary_share.decorators import with_retry
from itinerary_share.errors import (
    AuthenticationError,
    ConfigurationError,
    EmailTimeoutError,
    NetworkError,
    ProviderUnreachableError,
    SendingError,
)

logger = file_logger(getLogger(__name__))

# Regex pattern for header injection prevention
_HEADER_INJECTION_PATTERN = re_compile(r"[\r\n]")


class EmailClient:
    """
    A client to handle sending emails via the Gmail API.

    Built once at startup and shared by request handlers. The Gmail service is
    loaded lazily, so a missing credential only disables email delivery.
    """

    def __init__(
        self,
        token_file: Path | None = None,
        sender: str | None = None,
        timeout: float | None = None,
    ) -> None:
        """Initialize EmailClient with thread-safe lazy loading."""
        self._token_file = token_file or settings.GMAIL_TOKEN_FILE
        self._sender = sender or settings.MAIL_FROM or DEFAULT_SENDER
        self._timeout = timeout if timeout is not None else settings.EMAIL_TIMEOUT
        self._credentials: Credentials | None = None
        self._service: Resource | None = None
        # Lock ensures thread-safety during service lazy-loading
        self._service_lock: Lock = Lock()

    @property
    def is_configured(self) -> bool:
        """Whether a Gmail credential is available for sending."""
        return self._service is not None or self._token_file.exists()

    def _validate_token_file_permissions(self) -> None:
        """
        Validate and fix token file permissions for security.

        Ensures token file has secure permissions (600 on Unix systems).
        """
        if not self._token_file.exists():
            return

        try:
            mode = self._token_file.stat().st_mode
            # Check if group or others have any permissions
            if mode & (S_IRWXG | S_IRWXO):
                logger.warning("Token file has insecure permissions, fixing to owner-only access")
                chmod(self._token_file, S_IRUSR | S_IWUSR)
        except OSError:
            logger.exception("Failed to validate token file permissions")

    def _validate_email(self, email: str) -> str:
        """
        Validate and sanitize email address.

        Args:
            email: Email address to validate.

        Returns:
            Sanitized email address.

        Raises:
            ValueError: If email is invalid or contains injection characters.
        """
        # Gmail API special value for authenticated user
        if email == DEFAULT_SENDER:
            return email

        if _HEADER_INJECTION_PATTERN.search(email):
            mssg = "Email contains invalid characters (potential header injection)"
            raise ValueError(mssg)

        _, addr = parseaddr(email)
        if not addr or "@" not in addr:
            mssg = f"Invalid email address: {email}"
            raise ValueError(mssg)

        return addr

    def _sanitize_header(self, value: str) -> str:
        """Remove newlines from a header value to prevent header injection."""
        return _HEADER_INJECTION_PATTERN.sub("", value)

    def _get_credentials(self) -> Credentials:
        """
        Retrieve or refresh OAuth2 credentials.

        Strictly for server-side use: requires an existing token file.

        Returns:
            Valid OAuth2 credentials.

        Raises:
            AuthenticationError: If token is corrupt or refresh fails.
            ConfigurationError: If token file is missing.
        """
        self._validate_token_file_permissions()

        creds: Credentials | None = None

        if self._token_file.exists():
            try:
                creds = Credentials.from_authorized_user_file(
                    str(self._token_file),
                    settings.GMAIL_SCOPES,
                )
            except ValueError as e:
                mssg = "Token file is corrupt."
                logger.exception(mssg)
                raise AuthenticationError(mssg) from e

        if creds is None:
            logger.error("Token file not found or invalid.")
            mssg = "Email service not configured"
            raise ConfigurationError(mssg)

        if not creds.valid:
            if creds.expired and creds.refresh_token:
                logger.info("Refreshing expired Gmail access token.")
                try:
                    creds.refresh(Request())
                except Exception as e:
                    # google-auth can raise various errors
                    logger.exception("Token refresh failed.")
                    mssg = "Email token expired and refresh failed."
                    raise AuthenticationError(mssg) from e
            else:
                logger.error("Token is invalid and cannot be refreshed.")
                mssg = "Email service not configured"
                raise ConfigurationError(mssg)

        return creds

    @property
    def service(self) -> Resource:
        """
        Lazy-loads the Gmail API service safely across threads.

        Returns:
            Gmail API service resource.

        Raises:
            ConfigurationError: If service cannot be initialized.
        """
        if self._service is None:
            with self._service_lock:
                if self._service is None:
                    self._credentials = self._get_credentials()
                    self._service = build(
                        "gmail",
                        "v1",
                        credentials=self._credentials,
                        cache_discovery=False,
                    )
        if self._service is None:
            mssg = "Failed to initialize Gmail service"
            raise ConfigurationError(mssg)
        return self._service

    def _create_message(
        self,
        subject: str,
        html: str,
        sender: str,
        to: str,
    ) -> dict[str, str]:
        """
        Create an HTML MIME message and encode it for Gmail API.

        Args:
            subject: Email subject.
            html: Complete HTML document used as the body.
            sender: Sender address, or ``me`` for the authenticated account.
            to: Recipient email address.

        Returns:
            Dictionary with base64-encoded message.

        Raises:
            ValueError: If email addresses are invalid.
        """
        validated_to = self._validate_email(to)
        validated_sender = self._validate_email(sender)

        message = EmailMessage()
        message.set_content(html, subtype="html")
        message["To"] = validated_to
        # Gmail fills in the account address when From is absent
        if validated_sender != DEFAULT_SENDER:
            message["From"] = validated_sender
        message["Subject"] = self._sanitize_header(subject)

        encoded_message = urlsafe_b64encode(message.as_bytes()).decode()
        return {"raw": encoded_message}

    def send_sync(self, to: str, subject: str, html: str) -> dict[str, Any]:
        """
        Blocking method to send an email.

        Should not be called directly within an async route.
        """
        try:
            message_body = self._create_message(
                subject=subject,
                html=html,
                sender=self._sender,
                to=to,
            )

            # Cast to Any so static analysis ignores the dynamic .users() method
            service = cast(Any, self.service)
            result = service.users().messages().send(userId="me", body=message_body).execute()

            logger.info(f"Email sent. ID: {result.get('id')}")
            return result

        except HttpError as error:
            logger.exception("Google API Error")
            mssg = f"Google API refused request: {error}"
            raise SendingError(mssg) from error
        except (ConfigurationError, AuthenticationError):
            # Let these bubble up as is
            raise
        except ValueError as error:
            logger.exception("Refusing to build message")
            raise SendingError(str(error)) from error
        except (ConnectionRefusedError, gaierror, ServerNotFoundError) as error:
            # No connection was opened, so the message was not handed over
            logger.exception("Could not connect to email provider")
            mssg = "Email provider unreachable."
            raise ProviderUnreachableError(mssg) from error
        except OSError as error:
            # Resets and socket timeouts may come after Gmail accepted the message
            logger.exception("Network error during sending")
            mssg = "Network error while sending email."
            raise NetworkError(mssg) from error
        except Exception as error:
            # Catch unexpected python errors (e.g. encoding issues)
            logger.exception("Unexpected error during sending")
            mssg = "An unexpected internal error occurred."
            raise SendingError(mssg) from error

    @with_retry(
        max_retries=settings.EMAIL_MAX_RETRIES,
        base_delay=settings.EMAIL_RETRY_DELAY,
        exec_retry=(ProviderUnreachableError,),
    )
    async def send_html(self, to: str, subject: str, html: str) -> dict[str, Any]:
        """
        Asynchronous wrapper to send email without blocking the Event Loop.

        Runs ``send_sync`` in the default thread pool, bounded by the
        configured timeout. Failures to connect are retried once; other
        network errors are not, since the message may already be sent.

        Raises:
            EmailTimeoutError: If the provider did not answer in time.
        """
        loop = get_running_loop()
        try:
            return await wait_for(
                loop.run_in_executor(None, self.send_sync, to, subject, html),
                timeout=self._timeout,
            )
        except TimeoutError as e:
            logger.exception(f"Email sending timed out after {self._timeout}s")
            mssg = "Email provider timed out"
            raise EmailTimeoutError(mssg) from e
