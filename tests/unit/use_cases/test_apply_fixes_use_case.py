"""Unit tests for ApplyFixesUseCase."""

from unittest.mock import Mock

from ui_compliance.domain.protocols import FileSystemProtocol
from ui_compliance.use_cases.apply_fixes import ApplyFixesUseCase


def _filesystem(files: dict[str, str]) -> Mock:
    filesystem = Mock(spec=FileSystemProtocol)
    filesystem.read_text.side_effect = files.__getitem__
    return filesystem


class TestApplyFixesUseCase:
    """Test fix application and write-back."""

    def test_fixes_are_written_back(self, engine) -> None:
        """Fixed content is written and the remaining violations counted."""
        filesystem = _filesystem({"/app/Card.tsx": '<Box className="p-7" />'})
        telemetry = Mock()

        outcomes = ApplyFixesUseCase(engine, filesystem, telemetry).execute(["/app/Card.tsx"])

        filesystem.write_text.assert_called_once_with("/app/Card.tsx", '<Box className="p-6" />')
        assert len(outcomes) == 1
        outcome = outcomes[0]
        assert (outcome.applied, outcome.skipped, outcome.remaining_violations) == (1, 0, 0)
        telemetry.step.assert_called_once_with("Fixed 1 issue(s) in /app/Card.tsx")

    def test_dry_run_does_not_write(self, engine) -> None:
        filesystem = _filesystem({"/app/Card.tsx": "<div>x</div>"})
        telemetry = Mock()

        outcomes = ApplyFixesUseCase(engine, filesystem, telemetry).execute(
            ["/app/Card.tsx"], dry_run=True
        )

        filesystem.write_text.assert_not_called()
        assert outcomes[0].applied == 2
        telemetry.step.assert_called_once_with("Would fix 2 issue(s) in /app/Card.tsx")

    def test_files_without_applicable_fixes_are_skipped(self, engine) -> None:
        """Informational fixes alone (hardcoded colors) never touch the file."""
        filesystem = _filesystem({
            "/app/clean.tsx": "<Box />",
            "/app/theme.css": ".a { color: #fff; }",
        })

        outcomes = ApplyFixesUseCase(engine, filesystem, Mock()).execute(
            ["/app/clean.tsx", "/app/theme.css"]
        )

        assert outcomes == []
        filesystem.write_text.assert_not_called()

    def test_held_back_fixes_are_applied_on_a_later_pass(self, engine) -> None:
        """The spacing fix nested in a renamed class lands after re-validation."""
        filesystem = _filesystem({"/app/Card.tsx": '<Box className="ml-7" />'})

        outcomes = ApplyFixesUseCase(engine, filesystem, Mock()).execute(["/app/Card.tsx"])

        filesystem.write_text.assert_called_once_with("/app/Card.tsx", '<Box className="ms-6" />')
        outcome = outcomes[0]
        assert (outcome.applied, outcome.skipped) == (2, 0)
        assert outcome.remaining_violations == 0
