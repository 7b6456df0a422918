"""Application policy – PolicyManager.

The manager owns the authoritative role table.  Every mutation goes through
the same commit path:

1. derive the candidate table,
2. build an evaluator over it,
3. persist it through the :class:`~policy_engine.kernel.security.PolicyStore`,
4. swap in a new immutable snapshot (table + evaluator + state),
5. notify listeners once.

A failure in steps 1–3 leaves the previous snapshot in place and no
listener is called.  Mutations are serialised by an :class:`asyncio.Lock`;
readers (:meth:`PolicyManager.has_access`) never take the lock and always
see one complete snapshot.
"""

from __future__ import annotations

import asyncio
import dataclasses
import enum
from types import MappingProxyType
from typing import Any, Callable, Mapping

from policy_engine.application.policy.decoder import DecodeReport, PolicyDecoder
from policy_engine.application.policy.notifier import ChangeNotifier, Listener
from policy_engine.config.settings import EnvSettingsLoader, PolicyEngineSettings
from policy_engine.kernel.errors import (
    BaseError,
    PersistenceError,
    PolicyNotInitializedError,
    UsageError,
)
from policy_engine.kernel.security import (
    InMemoryPolicyStore,
    PolicyEvaluator,
    PolicyStore,
    Role,
    RoleEvaluator,
)
from policy_engine.observability.logging import JsonLoggerFactory, Logger, get_logger

EvaluatorFactory = Callable[[Mapping[str, Role]], PolicyEvaluator]


class PolicyManagerState(str, enum.Enum):
    UNINITIALIZED = "uninitialized"
    INITIALIZED = "initialized"


@dataclasses.dataclass(frozen=True)
class _Snapshot:
    roles: Mapping[str, Role]
    evaluator: PolicyEvaluator | None
    state: PolicyManagerState


_EMPTY = _Snapshot(
    roles=MappingProxyType({}),
    evaluator=None,
    state=PolicyManagerState.UNINITIALIZED,
)


class PolicyManager:
    """Policy lifecycle orchestrator.

    Parameters
    ----------
    store:
        Persistence backend; defaults to a fresh :class:`InMemoryPolicyStore`.
    decoder:
        Raw-input decoder; defaults to a :class:`PolicyDecoder` sharing *logger*.
    evaluator_factory:
        Builds an evaluator from a committed table; defaults to
        :class:`RoleEvaluator`.
    logger:
        Structured logger; defaults to a structlog logger for this module.
    settings:
        :class:`PolicyEngineSettings`; ``allow_partial_success`` controls how
        :meth:`initialize` decodes.

    Example::

        manager = PolicyManager()
        await manager.initialize({"admin": ["read", "write"], "user": ["read"]})
        manager.has_access("admin", "write")    # True
        await manager.add_role(Role("editor", ["read", "write"]))
    """

    def __init__(
        self,
        store: PolicyStore | None = None,
        *,
        decoder: PolicyDecoder | None = None,
        evaluator_factory: EvaluatorFactory = RoleEvaluator,
        logger: Logger | None = None,
        settings: PolicyEngineSettings | None = None,
    ) -> None:
        self._log: Logger = logger if logger is not None else get_logger(__name__)
        self._settings = settings or PolicyEngineSettings()
        self._store: PolicyStore = store if store is not None else InMemoryPolicyStore()
        self._decoder = decoder or PolicyDecoder(
            logger=self._log, summary_limit=self._settings.max_error_summary
        )
        self._evaluator_factory = evaluator_factory
        self._notifier = ChangeNotifier(logger=self._log)
        self._lock = asyncio.Lock()
        self._snapshot: _Snapshot = _EMPTY

    @classmethod
    def from_settings(
        cls,
        settings: PolicyEngineSettings | None = None,
        *,
        logger: Logger | None = None,
        configure_logging: bool = True,
    ) -> "PolicyManager":
        """Build a manager wired from :class:`PolicyEngineSettings`.

        *settings* defaults to the ``POLICY_ENGINE_*`` environment.  With
        *configure_logging*, ``log_level`` is applied through
        :class:`JsonLoggerFactory`.  A non-empty ``policy_file`` selects a
        :class:`JsonFilePolicyStore`; otherwise the store is in memory.
        """
        from policy_engine.adapters.files.store import JsonFilePolicyStore

        if settings is None:
            settings = EnvSettingsLoader().load(PolicyEngineSettings)
        if configure_logging:
            JsonLoggerFactory.configure(settings.log_level)
        store: PolicyStore = (
            JsonFilePolicyStore(settings.policy_file)
            if settings.policy_file
            else InMemoryPolicyStore()
        )
        return cls(store, logger=logger, settings=settings)

    # ------------------------------------------------------------------
    # Read side
    # ------------------------------------------------------------------

    @property
    def state(self) -> PolicyManagerState:
        return self._snapshot.state

    @property
    def is_initialized(self) -> bool:
        return self._snapshot.state is PolicyManagerState.INITIALIZED

    @property
    def roles(self) -> Mapping[str, Role]:
        """Read-only view of the committed role table."""
        return self._snapshot.roles

    @property
    def evaluator(self) -> PolicyEvaluator | None:
        return self._snapshot.evaluator

    @property
    def store(self) -> PolicyStore:
        return self._store

    def get_role(self, name: str) -> Role | None:
        return self._snapshot.roles.get(name)

    def has_access(self, role: str, content: str) -> bool:
        """Return whether *role* may access *content*.

        Before :meth:`initialize` has completed this logs the misuse and
        returns ``False``; it never raises.
        """
        snapshot = self._snapshot
        if snapshot.state is not PolicyManagerState.INITIALIZED or snapshot.evaluator is None:
            self._log.error(
                "policy_manager.not_initialized",
                operation="policy_manager_access_check",
                role=role,
                content=content,
            )
            return False
        return snapshot.evaluator.evaluate(role, content)

    def require_initialized(self) -> None:
        """Raise :class:`PolicyNotInitializedError` unless initialized."""
        if not self.is_initialized:
            raise PolicyNotInitializedError(operation="require_initialized")

    # ------------------------------------------------------------------
    # Listeners
    # ------------------------------------------------------------------

    def add_listener(self, listener: Listener) -> None:
        self._notifier.add_listener(listener)

    def remove_listener(self, listener: Listener) -> None:
        self._notifier.remove_listener(listener)

    # ------------------------------------------------------------------
    # Write side
    # ------------------------------------------------------------------

    async def initialize(self, raw: Mapping[str, Any]) -> DecodeReport:
        """Replace the role table with the decoded *raw* input.

        An input with no valid roles (including ``{}``) is a successful
        initialization with an empty table.

        Raises:
            DecodeError: decoding rejected the whole batch (strict settings).
            PersistenceError: the store failed to save; nothing is committed.
        """
        async with self._lock:
            self._log.info(
                "policy_manager.initializing",
                operation="policy_manager_initialize",
                policy_count=len(raw) if isinstance(raw, Mapping) else None,
                policy_keys=list(raw)[:5] if isinstance(raw, Mapping) else None,
            )
            try:
                report = self._decoder.decode(
                    raw, allow_partial_success=self._settings.allow_partial_success
                )
            except BaseError as exc:
                self._log.error(
                    "policy_manager.initialize_failed",
                    operation="policy_manager_initialize_error",
                    **exc.log_fields(),
                )
                raise

            await self._commit(
                report.roles,
                operation="initialize",
                state=PolicyManagerState.INITIALIZED,
            )
            if report.roles:
                self._log.info(
                    "policy_manager.initialized",
                    operation="policy_manager_initialized",
                    loaded_policies=report.succeeded_count,
                    total_policies=report.total,
                )
            else:
                self._log.warning(
                    "policy_manager.initialized_empty",
                    operation="policy_manager_empty",
                    total_policies=report.total,
                )
            self._notify()
        return report

    async def initialize_from_store(self) -> Mapping[str, Role]:
        """Adopt whatever table the store currently holds.

        Raises:
            PersistenceError: the store failed to load.
        """
        async with self._lock:
            roles = await self._guard_store("load", self._store.load())
            self._snapshot = self._build_snapshot(roles, PolicyManagerState.INITIALIZED)
            self._log.info(
                "policy_manager.initialized",
                operation="policy_manager_initialize_from_store",
                loaded_policies=len(roles),
            )
            self._notify()
        return self._snapshot.roles

    async def add_role(self, role: Role) -> None:
        """Insert or overwrite ``role`` under ``role.name`` (last write wins).

        Raises:
            UsageError: ``role.name`` is empty.
            PersistenceError: the store failed to save; nothing is committed.
        """
        if not role.name:
            raise self._usage_error("add_role", "Role name must not be empty")
        async with self._lock:
            roles = dict(self._snapshot.roles)
            roles[role.name] = role
            await self._commit(roles, operation="add_role")
            self._log.info("policy_manager.role_added", operation="add_role", role=role.name)
            self._notify()

    async def remove_role(self, name: str) -> None:
        """Delete the role stored under *name*.

        Removing an absent name is a successful no-op that still persists and
        notifies.

        Raises:
            UsageError: *name* is empty.
            PersistenceError: the store failed to save; nothing is committed.
        """
        if not name:
            raise self._usage_error("remove_role", "Role name must not be empty")
        async with self._lock:
            roles = dict(self._snapshot.roles)
            existed = roles.pop(name, None) is not None
            await self._commit(roles, operation="remove_role")
            self._log.info(
                "policy_manager.role_removed",
                operation="remove_role",
                role=name,
                existed=existed,
            )
            self._notify()

    async def update_role(self, name: str, role: Role) -> None:
        """Upsert *role* under the table key *name*.

        The key is *name* even when it differs from ``role.name``; when *name*
        is empty, ``role.name`` is used instead.

        Raises:
            UsageError: both *name* and ``role.name`` are empty.
            PersistenceError: the store failed to save; nothing is committed.
        """
        if not name and not role.name:
            raise self._usage_error("update_role", "Role name must not be empty")
        key = name or role.name
        async with self._lock:
            roles = dict(self._snapshot.roles)
            created = key not in roles
            roles[key] = role
            await self._commit(roles, operation="update_role")
            if key != role.name:
                self._log.warning(
                    "policy_manager.role_key_mismatch",
                    operation="update_role",
                    key=key,
                    role=role.name,
                )
            self._log.info(
                "policy_manager.role_updated",
                operation="update_role",
                role=key,
                created=created,
            )
            self._notify()

    async def clear(self) -> None:
        """Remove every role from memory and from the store.

        The manager's state is unchanged.

        Raises:
            PersistenceError: the store failed to clear; nothing is committed.
        """
        async with self._lock:
            await self._guard_store("clear", self._store.clear())
            self._snapshot = self._build_snapshot({}, self._snapshot.state)
            self._log.info("policy_manager.cleared", operation="clear")
            self._notify()

    # ------------------------------------------------------------------
    # Internals
    # ------------------------------------------------------------------

    def _build_snapshot(self, roles: Mapping[str, Role], state: PolicyManagerState) -> _Snapshot:
        table = MappingProxyType(dict(roles))
        return _Snapshot(roles=table, evaluator=self._evaluator_factory(table), state=state)

    async def _commit(
        self,
        roles: Mapping[str, Role],
        *,
        operation: str,
        state: PolicyManagerState | None = None,
    ) -> None:
        snapshot = self._build_snapshot(roles, state or self._snapshot.state)
        await self._guard_store("save", self._store.save(snapshot.roles), trigger=operation)
        self._snapshot = snapshot

    async def _guard_store(self, action: str, call: Any, *, trigger: str | None = None) -> Any:
        try:
            return await call
        except PersistenceError as exc:
            self._log.error(
                "policy_manager.store_failed",
                operation=trigger or action,
                store_action=action,
                **exc.log_fields(),
            )
            raise
        except Exception as exc:
            wrapped = PersistenceError(
                f"Policy store failed to {action}: {exc}",
                operation=action,
                cause=exc,
            )
            self._log.error(
                "policy_manager.store_failed",
                operation=trigger or action,
                store_action=action,
                **wrapped.log_fields(),
            )
            raise wrapped from exc

    def _usage_error(self, operation: str, message: str) -> UsageError:
        self._log.error("policy_manager.usage_error", operation=operation, reason=message)
        return UsageError(message, operation=operation)

    def _notify(self) -> None:
        self._notifier.notify_listeners()


__all__ = ["EvaluatorFactory", "PolicyManager", "PolicyManagerState"]
