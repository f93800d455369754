"""Use Case: Apply range fixes to source text, and to files on disk."""

import logging
from collections.abc import Iterable
from dataclasses import dataclass
from typing import TYPE_CHECKING

from ui_compliance.domain.entities import Fix, FixRange

if TYPE_CHECKING:
    from ui_compliance.domain.config import Configuration
    from ui_compliance.domain.entities import FileReport
    from ui_compliance.domain.protocols import FileSystemProtocol, TelemetryPort
    from ui_compliance.use_cases.validation_engine import ValidationEngine

logger = logging.getLogger(__name__)

# Re-validation rounds for fixes held back by an overlapping fix.
MAX_FIX_PASSES = 3


@dataclass(frozen=True)
class FixApplication:
    """
    Fixed text plus which fixes were applied and which were skipped.

    `skipped` holds every unapplied ranged fix; `conflicting` is the subset
    dropped because it overlapped a fix that was applied. Those become
    applicable again once the document is re-validated.
    """

    content: str
    applied: tuple[Fix, ...]
    skipped: tuple[Fix, ...]
    conflicting: tuple[Fix, ...] = ()

    @property
    def changed(self) -> bool:
        return bool(self.applied)


def _in_bounds(fix_range: FixRange, lines: list[str]) -> bool:
    start, end = fix_range.start, fix_range.end
    if end < start:
        return False
    if not (1 <= start.line <= len(lines) and 1 <= end.line <= len(lines)):
        return False
    return (
        0 <= start.column <= len(lines[start.line - 1])
        and 0 <= end.column <= len(lines[end.line - 1])
    )


def _resolve_overlaps(fixes: list[Fix]) -> tuple[list[Fix], list[Fix]]:
    """
    Pick a non-overlapping subset of valid fixes.

    Fixes are walked by ascending start, widest first on ties, so a fix that
    encloses another (an attribute removal around a property rewrite, a class
    rename around its spacing index) wins. A fix starting before the end of an
    accepted one is rejected. Empty ranges touching an accepted boundary do not
    overlap it.
    """
    ordered = sorted(
        fixes,
        key=lambda fix: (
            fix.range.start.line,  # type: ignore[union-attr]
            fix.range.start.column,  # type: ignore[union-attr]
            -fix.range.end.line,  # type: ignore[union-attr]
            -fix.range.end.column,  # type: ignore[union-attr]
        ),
    )
    accepted: list[Fix] = []
    rejected: list[Fix] = []
    for fix in ordered:
        fix_range = fix.range
        assert fix_range is not None
        if accepted:
            previous = accepted[-1].range
            assert previous is not None
            if fix_range.start < previous.end:
                logger.info(
                    "Skipping fix %r: overlaps %r",
                    fix.description,
                    accepted[-1].description,
                )
                rejected.append(fix)
                continue
        accepted.append(fix)
    return accepted, rejected


class TextFixApplier:
    """
    Applies an unordered batch of range fixes in one pass.

    Overlapping fixes are resolved first: the enclosing (or earlier) fix is
    kept and the other lands in `conflicting`. The survivors are applied from
    the end of the document towards the beginning, so earlier coordinates
    stay valid. Range-less fixes are ignored; a fix whose range falls outside
    the document, or ends before it starts, is skipped without affecting the
    others.
    """

    def apply(self, content: str, fixes: Iterable[Fix]) -> FixApplication:
        lines = content.split("\n")
        valid: list[Fix] = []
        invalid: list[Fix] = []
        for fix in fixes:
            fix_range = fix.range
            if fix_range is None:
                continue
            if not _in_bounds(fix_range, lines):
                logger.warning(
                    "Skipping fix %r: range %s-%s is outside the document",
                    fix.description,
                    (fix_range.start.line, fix_range.start.column),
                    (fix_range.end.line, fix_range.end.column),
                )
                invalid.append(fix)
                continue
            valid.append(fix)
        accepted, conflicting = _resolve_overlaps(valid)
        applied: list[Fix] = []
        for fix in reversed(accepted):
            assert fix.range is not None
            start, end = fix.range.start, fix.range.end
            if start.line == end.line:
                line = lines[start.line - 1]
                lines[start.line - 1] = line[:start.column] + fix.fix + line[end.column:]
            else:
                prefix = lines[start.line - 1][:start.column]
                suffix = lines[end.line - 1][end.column:]
                lines[start.line - 1:end.line] = [prefix + fix.fix + suffix]
            applied.append(fix)
        return FixApplication(
            "\n".join(lines),
            tuple(applied),
            tuple(invalid + conflicting),
            tuple(conflicting),
        )



@dataclass(frozen=True)
class FileFixOutcome:
    """Per-file outcome of the fix command."""

    file_path: str
    applied: int
    skipped: int
    remaining_violations: int


class ApplyFixesUseCase:
    """Validate files, apply every range fix and write the result back (unless dry run)."""

    def __init__(
        self,
        engine: "ValidationEngine",
        filesystem: "FileSystemProtocol",
        telemetry: "TelemetryPort",
    ) -> None:
        self.engine = engine
        self.filesystem = filesystem
        self.telemetry = telemetry

    def execute(
        self,
        file_paths: list[str],
        config: "Configuration | None" = None,
        dry_run: bool = False,
    ) -> list[FileFixOutcome]:
        outcomes: list[FileFixOutcome] = []
        for path in file_paths:
            content = self.filesystem.read_text(path)
            report = self.engine.validate_file(path, content, config)
            if not report.applicable_fixes:
                continue
            fixed, applied, skipped, after = self._fix_until_stable(path, content, report, config)
            if not applied:
                continue
            if not dry_run:
                self.filesystem.write_text(path, fixed)
            verb = "Would fix" if dry_run else "Fixed"
            self.telemetry.step(f"{verb} {applied} issue(s) in {path}")
            if skipped:
                self.telemetry.warning(f"Skipped {skipped} fix(es) in {path}")
            outcomes.append(FileFixOutcome(
                file_path=path,
                applied=applied,
                skipped=skipped,
                remaining_violations=len(after.violations),
            ))
        return outcomes

    def _fix_until_stable(
        self,
        path: str,
        content: str,
        report: "FileReport",
        config: "Configuration | None",
    ) -> tuple[str, int, int, "FileReport"]:
        """
        Apply fixes, re-validating while overlapping fixes were held back.

        A fix dropped for overlapping another is recomputed against the
        rewritten text on the next pass. Returns the final content, the
        applied and skipped counts and the final report.
        """
        applied = 0
        skipped = 0
        for _ in range(MAX_FIX_PASSES):
            application = self.engine.fix_content(content, report.fixes)
            if not application.changed:
                break
            content = application.content
            applied += len(application.applied)
            skipped = len(application.skipped) - len(application.conflicting)
            report = self.engine.validate_file(path, content, config)
            if not application.conflicting:
                break
        else:
            skipped = len(report.applicable_fixes)
        return content, applied, skipped, report
