"""Options for the scheduled daily tasks: partner, scrobble and sign-in."""

from __future__ import annotations

from dataclasses import dataclass, field

from .cron import CronError, parse_standard
from .partner import PartnerOptions
from .scrobble import ScrobbleOptions

SIGN = "sign"
PARTNER = "partner"
SCROBBLE = "scrobble"


@dataclass
class TaskOptions:
    """Which daily tasks run, on what crontab, with what options."""

    location: str = "Asia/Shanghai"
    run_all: bool = False

    partner: bool = False
    partner_cron: str = "0 18 * * *"
    partner_opts: PartnerOptions = field(default_factory=PartnerOptions)

    scrobble: bool = False
    scrobble_cron: str = "0 18 * * *"
    scrobble_opts: ScrobbleOptions = field(default_factory=ScrobbleOptions)

    sign_in: bool = False
    sign_in_cron: str = "0 10 * * *"
    automatic: bool = False

    def enabled_tasks(self) -> list[str]:
        """Return the task names to register, all of them when none is chosen."""
        if self.run_all or not (self.sign_in or self.partner or self.scrobble):
            return [SIGN, PARTNER, SCROBBLE]
        chosen = []
        if self.sign_in:
            chosen.append(SIGN)
        if self.partner:
            chosen.append(PARTNER)
        if self.scrobble:
            chosen.append(SCROBBLE)
        return chosen

    def _check(self, name: str) -> None:
        expression = {
            SIGN: self.sign_in_cron,
            PARTNER: self.partner_cron,
            SCROBBLE: self.scrobble_cron,
        }[name]
        if not expression:
            raise ValueError(f"{name}.crontab is required")
        try:
            parse_standard(expression)
        except CronError as exc:
            raise ValueError(f"ParseStandard: {exc}") from exc

    def validate(self) -> None:
        """Check the crontab of each enabled task.

        When every task runs, all problems are reported together, one per line;
        otherwise the first problem is raised.
        """
        every_task = self.run_all or not (self.sign_in or self.partner or self.scrobble)
        if not every_task:
            for name in self.enabled_tasks():
                self._check(name)
            return

        problems = []
        for name in self.enabled_tasks():
            try:
                self._check(name)
            except ValueError as exc:
                problems.append(str(exc))
        if problems:
            raise ValueError("\n".join(problems))