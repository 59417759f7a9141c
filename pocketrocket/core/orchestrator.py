"""
Top-level bootstrap sequence.

Acquires the cloud client, resolves the state bucket and encryption
key, builds the workspace and hands it to the lifecycle controller.
Resources created along the way are not rolled back when a later step
fails.
"""

import logging
from typing import Callable, Optional, Tuple

from ..config import Settings
from ..prompts import Prompter
from ..security.sanitizer import InputSanitizer
from ..utils import validate_pulumi_installed
from .lifecycle import LifecycleController, LifecycleState
from .locator import BackendLocator, build_locator
from .pulumi_runner import PulumiRunner
from .resolver import ENCRYPTION_KEY, STORAGE, CreateNew, ResourceResolver
from .workspace import StackManager, WorkspaceHandle, create_workspace

logger = logging.getLogger(__name__)

HEADER = "🚀 Welcome to the pocketrocket bootstrap process"


def _connect_aws(settings: Settings):
    from ..providers import AwsResourceProvider
    return AwsResourceProvider.connect(
        profile=settings.get("aws.profile"),
        region=settings.get("aws.region"),
    )


class BootstrapOrchestrator:
    """
    Runs one bootstrap from client acquisition to a terminal
    lifecycle state.

    Collaborators are injectable so the whole sequence can run against
    stubs.
    """

    def __init__(
        self,
        settings: Settings,
        prompter: Prompter,
        provider_factory: Optional[Callable[[Settings], object]] = None,
        workspace_factory: Callable[..., WorkspaceHandle] = create_workspace,
        stacks_factory: Optional[Callable[[WorkspaceHandle], StackManager]] = None,
        runner: Optional[PulumiRunner] = None,
        check_engine: bool = True,
    ):
        self.settings = settings
        self.prompter = prompter
        self.provider_factory = provider_factory or _connect_aws
        self.workspace_factory = workspace_factory
        self.stacks_factory = stacks_factory or self._default_stacks
        self.runner = runner or PulumiRunner(
            pulumi_binary=settings.get("pulumi_binary", "pulumi"),
            color=settings.get("output.color", "always"),
        )
        self.check_engine = check_engine
        self.resolver = ResourceResolver(
            prompter, default_region=settings.get("backend.default_region")
        )
        self.workspace: Optional[WorkspaceHandle] = None
        self.controller: Optional[LifecycleController] = None

    def _default_stacks(self, workspace: WorkspaceHandle) -> StackManager:
        return StackManager(workspace, pulumi_binary=self.settings.get("pulumi_binary", "pulumi"))

    def run(self) -> LifecycleState:
        """
        Execute the full bootstrap.

        Raises:
            PocketRocketError: On any failure, including a declined confirmation
            SecurityError: On invalid project or stack input
        """
        self.prompter.show(HEADER)
        if self.check_engine:
            self._check_engine()

        self.prompter.show("🔸 Bootstrapping aws client...")
        provider = self.provider_factory(self.settings)

        project = self.prompter.ask(
            "Enter the project name", default=self.settings.get("project.name") or None
        )
        InputSanitizer.sanitize_project_name(project)

        storage_id, prefix = self._setup_storage(provider)
        key_id = self._setup_key(provider)

        locator = self.build_locator(storage_id, prefix, key_id)
        self.workspace = self.workspace_factory(
            project,
            locator,
            self.settings.get("project.program_dir", "."),
            runtime=self.settings.get("project.runtime", "python"),
            aws_profile=self.settings.get("aws.profile"),
            aws_region=self.settings.get("aws.region"),
        )

        self.controller = LifecycleController(
            self.workspace,
            self.stacks_factory(self.workspace),
            self.runner,
            self.prompter,
            default_stack=self.settings.get("stack.default_name", "prod"),
        )
        state = self.controller.run()
        logger.info(f"Bootstrap finished: {state.value}")
        return state

    def build_locator(self, storage_id: str, prefix: str, key_id: Optional[str]) -> BackendLocator:
        return build_locator(
            storage_id,
            prefix,
            key_id,
            scheme=self.settings.get("backend.scheme", "s3"),
            secrets_scheme=self.settings.get("secrets.scheme", "awskms"),
        )

    def _check_engine(self):
        binary = self.settings.get("pulumi_binary", "pulumi")
        installed, version = validate_pulumi_installed(binary)
        if installed:
            logger.info(f"Using {version}")
        else:
            logger.warning(f"'{binary}' not found, stack operations will fail")

    def _setup_storage(self, provider) -> Tuple[str, str]:
        reuse = self.resolver.wants_reuse(STORAGE)
        candidates = provider.list_storage() if reuse else []
        choice = self.resolver.resolve(STORAGE, candidates, reuse)

        if isinstance(choice, CreateNew):
            location = provider.create_storage(choice.name, choice.location_hint)
            return location, ""
        return choice.identifier, choice.prefix

    def _setup_key(self, provider) -> Optional[str]:
        if not self.settings.get("secrets.enabled", True):
            logger.info("Secrets provider disabled, using the engine default")
            return None

        reuse = self.resolver.wants_reuse(ENCRYPTION_KEY)
        candidates = provider.list_keys() if reuse else []
        choice = self.resolver.resolve(ENCRYPTION_KEY, candidates, reuse)

        if isinstance(choice, CreateNew):
            return provider.create_key(
                choice.name, description=self.settings.get("secrets.description", "")
            )
        return choice.identifier
