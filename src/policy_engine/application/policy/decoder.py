"""Application policy – PolicyDecoder.

Turns raw, JSON-shaped policy input into a validated role table.  Every
entry is parsed on its own into ``Ok(Role)`` or ``Err(ValidationError)``;
failures are skipped and reported instead of aborting the batch unless the
caller asks for strict decoding.
"""

from __future__ import annotations

import dataclasses
from types import MappingProxyType
from typing import Any, Callable, Iterator, Mapping

from policy_engine.kernel.errors import DecodeError, ValidationError
from policy_engine.kernel.security.role import Role
from policy_engine.kernel.types import Err, Ok, Result
from policy_engine.observability.logging import Logger, get_logger

#: Number of per-key errors quoted in a :class:`DecodeError` message.
DEFAULT_SUMMARY_LIMIT = 3
#: Number of failed keys attached to the partial-failure warning.
DEFAULT_FAILED_KEYS_LIMIT = 5

EntryParser = Callable[[str, Any], Result[Role, ValidationError]]


@dataclasses.dataclass(frozen=True)
class DecodeReport:
    """Outcome of a batch decode.

    Unpacks as ``(roles, errors)``::

        roles, errors = decoder.decode(raw)
    """

    roles: Mapping[str, Role]
    errors: Mapping[str, str]
    total: int

    @property
    def succeeded_count(self) -> int:
        return len(self.roles)

    @property
    def failed_count(self) -> int:
        return len(self.errors)

    @property
    def ok(self) -> bool:
        return not self.errors

    def failed_keys(self, limit: int | None = DEFAULT_FAILED_KEYS_LIMIT) -> list[str]:
        keys = list(self.errors)
        return keys if limit is None else keys[:limit]

    def summary(self, limit: int = DEFAULT_SUMMARY_LIMIT) -> str:
        """One-line description of the first *limit* failures."""
        return ", ".join(f"{k}: {v}" for k, v in list(self.errors.items())[:limit])

    def __iter__(self) -> Iterator[Any]:
        yield self.roles
        yield self.errors


def _check_key(key: Any) -> Err[ValidationError] | None:
    if not isinstance(key, str):
        return Err(
            ValidationError(
                "Role name must be a string",
                key=str(key),
                errors=[{"expected_type": "str", "actual_type": type(key).__name__}],
            )
        )
    if not key:
        return Err(ValidationError("Role name must not be empty", key=key))
    return None


def parse_content_list(key: str, value: Any) -> Result[Role, ValidationError]:
    """Parse one raw entry: *value* must be a list of strings."""
    rejected = _check_key(key)
    if rejected is not None:
        return rejected
    if value is None:
        return Err(ValidationError("Skipping null policy value", key=key))
    if not isinstance(value, (list, tuple)):
        actual = type(value).__name__
        return Err(
            ValidationError(
                f"Invalid policy value type: expected list, got {actual}",
                key=key,
                errors=[{"expected_type": "list", "actual_type": actual}],
            )
        )
    bad = [type(item).__name__ for item in value if not isinstance(item, str)]
    if bad:
        return Err(
            ValidationError(
                "Policy contains non-string content items",
                key=key,
                errors=[{"expected_type": "str", "actual_type": t} for t in bad],
            )
        )
    return Ok(Role(name=key, allowed_content=value))


def parse_role_object(key: str, value: Any) -> Result[Role, ValidationError]:
    """Parse one extended entry: a per-role object or a plain content list."""
    if isinstance(value, Mapping):
        rejected = _check_key(key)
        if rejected is not None:
            return rejected
        try:
            return Ok(Role.from_dict(value, default_name=key))
        except ValidationError as exc:
            return Err(exc)
    return parse_content_list(key, value)


class PolicyDecoder:
    """Batch decoder with partial-success semantics.

    Parameters
    ----------
    logger:
        Structured logger; defaults to a structlog logger for this module.
    summary_limit:
        How many per-key errors are quoted in a :class:`DecodeError` message.

    Example::

        report = PolicyDecoder().decode({"admin": ["read"], "bad": "x"})
        report.roles      # {"admin": Role("admin", ...)}
        report.errors     # {"bad": "Invalid policy value type: ..."}
    """

    def __init__(
        self,
        *,
        logger: Logger | None = None,
        summary_limit: int = DEFAULT_SUMMARY_LIMIT,
    ) -> None:
        self._log: Logger = logger if logger is not None else get_logger(__name__)
        self._summary_limit = summary_limit

    def decode(
        self,
        raw: Mapping[str, Any],
        allow_partial_success: bool = True,
    ) -> DecodeReport:
        """Decode the raw ``role -> [content, ...]`` format.

        Raises:
            DecodeError: *allow_partial_success* is false and at least one
                entry failed, or nothing decoded at all.
        """
        return self._decode(raw, parse_content_list, allow_partial_success, "raw_policy")

    def decode_role_objects(
        self,
        raw: Mapping[str, Any],
        allow_partial_success: bool = True,
    ) -> DecodeReport:
        """Decode the extended ``role -> {"allowedContent": [...], ...}`` format.

        Plain content lists are accepted alongside per-role objects.
        """
        return self._decode(raw, parse_role_object, allow_partial_success, "role_objects")

    def _decode(
        self,
        raw: Mapping[str, Any],
        parse: EntryParser,
        allow_partial_success: bool,
        context: str,
    ) -> DecodeReport:
        if not isinstance(raw, Mapping):
            raise DecodeError(
                f"Policy input must be a mapping, got {type(raw).__name__}",
                detail={"context": context},
            )

        self._log.debug(
            "policy_decoder.started",
            total_items=len(raw),
            context=context,
            allow_partial_success=allow_partial_success,
        )

        roles: dict[str, Role] = {}
        errors: dict[str, str] = {}
        for key, value in raw.items():
            result = parse(key, value)
            if isinstance(result, Ok):
                roles[key] = result.value
                continue
            exc = result.error
            errors[key] = exc.message
            self._log.warning(
                "policy_validation_skip",
                role=key,
                reason=exc.message,
                errors=exc.errors,
                context=context,
            )

        report = DecodeReport(
            roles=MappingProxyType(roles),
            errors=MappingProxyType(errors),
            total=len(raw),
        )
        self._log.info(
            "policy_decoder.completed",
            total_items=report.total,
            successful_items=report.succeeded_count,
            failed_items=report.failed_count,
            context=context,
        )

        if not allow_partial_success and (errors or not roles):
            raise self._decode_error(report, context)

        if errors:
            self._log.warning(
                "policy_decoder.partial_failure",
                failed_count=report.failed_count,
                failed_keys=report.failed_keys(),
                context=context,
            )
        return report

    def _decode_error(self, report: DecodeReport, context: str) -> DecodeError:
        if report.roles:
            message = (
                f"Failed to decode {report.failed_count} of {report.total} policy entries. "
                f"First few errors: {report.summary(self._summary_limit)}"
            )
        elif report.errors:
            message = (
                "Failed to decode any policy entries. "
                f"First few errors: {report.summary(self._summary_limit)}"
            )
        else:
            message = "Policy input contains no entries"
        self._log.error(
            "policy_decoder.rejected",
            failed_count=report.failed_count,
            failed_keys=report.failed_keys(),
            context=context,
        )
        return DecodeError(
            message,
            errors=report.errors,
            detail={
                "context": context,
                "total_items": report.total,
                "failed_items": report.failed_count,
            },
        )


__all__ = [
    "DecodeReport",
    "PolicyDecoder",
    "parse_content_list",
    "parse_role_object",
]
