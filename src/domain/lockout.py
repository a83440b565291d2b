"""
Lockout Policy

Pure state transition for the per-user failed login counter.
"""

from dataclasses import dataclass
from datetime import datetime
from typing import Optional

MAX_FAILED_LOGINS = 5


@dataclass(frozen=True)
class LockoutDecision:
    """Status fields to persist after a login attempt"""

    failed_login_count: int
    blocked: bool
    blocked_since: Optional[datetime] = None


def apply_login_attempt(
    failed_login_count: int,
    succeeded: bool,
    now: datetime,
    max_failed_logins: int = MAX_FAILED_LOGINS,
) -> LockoutDecision:
    """
    Compute the next lockout state for a user.

    Counting is per user, never per client address. A successful attempt
    resets the counter unconditionally. A failed attempt increments it and
    blocks the account once the counter reaches max_failed_logins. Blocked
    accounts never unlock here: login rejects them before this is reached,
    and only an administrator can clear the flag.

    Args:
        failed_login_count: Counter value stored on the user
        succeeded: Whether the password matched
        now: Time of the attempt, recorded as blocked_since on lockout
        max_failed_logins: Threshold at which the account is blocked

    Returns:
        LockoutDecision with the new counter and blocked state
    """
    if succeeded:
        return LockoutDecision(failed_login_count=0, blocked=False)

    next_count = failed_login_count + 1
    if next_count >= max_failed_logins:
        return LockoutDecision(
            failed_login_count=next_count, blocked=True, blocked_since=now
        )
    return LockoutDecision(failed_login_count=next_count, blocked=False)
