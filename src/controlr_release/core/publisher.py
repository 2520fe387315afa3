"""Registry publisher: authentication resolution and pushes.

State machine:
- no push requested: done, nothing pushed
- login check skipped: push directly
- authenticated: push
- not authenticated, terminal available: offer ``docker login``
  (accept and succeed: push; accept and fail: LoginFailed;
  decline: clean stop, image kept locally)
- not authenticated, no terminal: AuthenticationRequiredNonInteractive
"""

from collections.abc import Callable
from pathlib import Path

from ..constants import LATEST_TAG
from ..errors import AuthenticationRequiredNonInteractive, LoginFailed, PushFailed
from ..models import ImageReference, PublishReport, RegistryAuthState, StageResult
from ..output import OutputContext
from ..prompts import Confirm
from ..services import CommandError, DockerClient, has_credentials
from .versioning import is_production_tag

LOGIN_PROMPT = "Do you want to login now?"
STAGE = "publish"


def push_commands(image: ImageReference) -> list[str]:
    """Manual push commands for an image, including the ``latest`` alias."""
    commands = [f"docker push {image.uri}"]
    if is_production_tag(image.tag):
        commands.append(f"docker push {image.with_tag(LATEST_TAG).uri}")
    return commands


class RegistryPublisher:
    """Pushes a built image, resolving registry authentication first."""

    def __init__(
        self,
        docker: DockerClient,
        confirm: Confirm,
        ctx: OutputContext,
        credentials_path: Path | None = None,
        credentials_check: Callable[[str, Path | None], bool] = has_credentials,
    ) -> None:
        self.docker = docker
        self.confirm = confirm
        self.ctx = ctx
        self.credentials_path = credentials_path
        self.credentials_check = credentials_check

    def auth_state(self, registry: str) -> RegistryAuthState:
        if self.credentials_check(registry, self.credentials_path):
            return RegistryAuthState.AUTHENTICATED
        if self.confirm.interactive:
            return RegistryAuthState.PROMPT_AVAILABLE
        return RegistryAuthState.NON_INTERACTIVE

    def publish(
        self, image: ImageReference, no_push: bool = False, skip_login_check: bool = False
    ) -> StageResult:
        """Decide whether to push, authenticate, and push.

        Returns:
            Succeeded with a PublishReport, cancelled if the operator declined
            to log in, or failed with the error that stopped the push.
        """
        if no_push:
            self.ctx.warning("Image was not pushed to registry (--no-push flag)")
            return StageResult.success(
                STAGE, PublishReport(image=image, skipped_reason="no-push")
            )

        if skip_login_check:
            self.ctx.info("Skipping authentication check (--skip-login flag set)")
        else:
            outcome = self._authenticate(image)
            if outcome is not None:
                return outcome

        try:
            report = self.push(image)
        except PushFailed as e:
            return StageResult.failure(STAGE, e)
        return StageResult.success(STAGE, report)

    def _authenticate(self, image: ImageReference) -> StageResult | None:
        """Return None when pushing may proceed, else the terminal result."""
        registry = image.registry
        self.ctx.info(f"Checking registry authentication for {registry}...")
        state = self.auth_state(registry)

        if state is RegistryAuthState.AUTHENTICATED:
            self.ctx.success(f"Already authenticated to {registry}")
            return None

        self.ctx.warning(f"Not authenticated to {registry}")
        login = f"docker login {registry}"

        if state is RegistryAuthState.NON_INTERACTIVE:
            return StageResult.failure(
                STAGE,
                AuthenticationRequiredNonInteractive(
                    "Cannot login in non-interactive mode",
                    tag=image.tag,
                    details="Image built but not pushed",
                    hints=[login, *push_commands(image)],
                ),
            )

        self.ctx.info(f"Please login to {registry} first:")
        self.ctx.command(login)
        if not self.confirm(LOGIN_PROMPT):
            self.ctx.warning("Skipping push - not authenticated")
            return StageResult.cancelled(
                STAGE,
                "Image built successfully but not pushed",
                hints=[login, *push_commands(image)],
                value=PublishReport(image=image, skipped_reason="login-declined"),
            )

        try:
            result = self.docker.login(registry)
            logged_in = result.ok
            reason = f"docker login exited with code {result.returncode}"
        except CommandError as e:
            logged_in = False
            reason = str(e)
        if not logged_in:
            return StageResult.failure(
                STAGE,
                LoginFailed(
                    "Failed to login to registry",
                    tag=image.tag,
                    details=f"Image built but not pushed ({reason})",
                    hints=push_commands(image),
                ),
            )
        self.ctx.success("Logged in to registry")
        return None

    def _push_one(self, image: ImageReference) -> None:
        self.ctx.info(f"Pushing image {image.uri}...")
        try:
            result = self.docker.push(image.uri)
        except CommandError as e:
            raise PushFailed(f"Failed to push {image.uri}: {e}", tag=image.tag) from e
        if not result.ok:
            raise PushFailed(f"Failed to push {image.uri}", tag=image.tag)
        self.ctx.success(f"Pushed {image.uri}")

    def push(self, image: ImageReference) -> PublishReport:
        """Push the primary tag, then ``latest`` for production tags.

        A failed primary push stops before the alias. A failed alias push
        leaves the primary tag published; it is reported, not rolled back.

        Raises:
            PushFailed: If either push fails
        """
        report = PublishReport(image=image)
        try:
            self._push_one(image)
        except PushFailed as e:
            e.hints = push_commands(image)
            raise
        report.pushed_tags.append(image.tag)

        if is_production_tag(image.tag):
            latest = image.with_tag(LATEST_TAG)
            try:
                self._push_one(latest)
            except PushFailed as e:
                e.tag = LATEST_TAG
                e.details = f"{image.uri} was published; {latest.uri} was not"
                e.hints = [f"docker push {latest.uri}"]
                raise
            report.pushed_tags.append(LATEST_TAG)
        return report
