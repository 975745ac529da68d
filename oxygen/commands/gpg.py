"""GPG command: sign and verify commits, tags and files."""

import logging

from oxygen.commands.base import error_text, require_repo, succeeded, try_run
from oxygen.dependencies import Dependencies
from oxygen.exceptions import ExecError
from oxygen.models import CommandResult, GpgAction, SetupStep
from oxygen.services.parsers import first_line
from oxygen.ui import Report, Status, failure, icon

logger = logging.getLogger(__name__)

SETUP_HINT = "Run 'oxy gpg setup' to configure GPG signing"

QUICK_COMMANDS = (
    "Sign last commit: oxy gpg sign commit",
    "Create signed tag: git tag -s v1.0.0 -m 'Version 1.0.0'",
    "Verify signatures: oxy gpg verify commit",
)


def _action_failure(action: str, message: str, outcome: CommandResult | ExecError) -> Report:
    error = error_text(outcome)
    report = Report(payload={"action": action, "status": "error", "error": error}, ok=False)
    report.status(Status.ERROR, message)
    report.text(f"Error: {error}")
    return report


async def _config_value(deps: Dependencies, key: str) -> str:
    """Read a git config value, empty when unset or git is unavailable."""
    outcome = await try_run(deps, "git", ["config", key])
    if not succeeded(outcome):
        return ""
    assert isinstance(outcome, CommandResult)
    return outcome.stdout.strip()


async def _latest_tag(deps: Dependencies) -> str | None:
    outcome = await try_run(deps, "git", ["describe", "--tags", "--abbrev=0"])
    if not succeeded(outcome):
        return None
    assert isinstance(outcome, CommandResult)
    return outcome.stdout.strip() or None


async def sign_commit(deps: Dependencies) -> Report:
    """Re-sign the last commit with the configured key."""
    precondition = require_repo(deps, "sign_commit")
    if precondition:
        return precondition

    signing_key = await _config_value(deps, "user.signingkey")
    if not signing_key:
        return failure(
            "GPG signing not configured",
            "GPG signing not configured for git",
            action="sign_commit",
            suggestion=SETUP_HINT,
        )

    outcome = await try_run(deps, "git", ["commit", "--amend", "--no-edit", "-S"])
    if not succeeded(outcome):
        return _action_failure("sign_commit", "Failed to sign commit", outcome)

    report = Report(
        payload={"action": "sign_commit", "status": "success", "signing_key": signing_key}
    )
    report.status(Status.SUCCESS, "Successfully signed the last commit")
    report.text(f"🔑 Using key: {signing_key}")
    return report


async def sign_tag(deps: Dependencies) -> Report:
    """Re-create the most recent tag as a signed tag."""
    precondition = require_repo(deps, "sign_tag")
    if precondition:
        return precondition

    tag = await _latest_tag(deps)
    if not tag:
        return failure("No tags found", "No tags found in repository", action="sign_tag")

    outcome = await try_run(deps, "git", ["tag", "-s", tag, "-f", "-m", f"Signed tag {tag}"])
    if not succeeded(outcome):
        report = _action_failure("sign_tag", f"Failed to sign tag: {tag}", outcome)
        report.payload["tag"] = tag
        return report

    report = Report(payload={"action": "sign_tag", "status": "success", "tag": tag})
    report.status(Status.SUCCESS, f"Successfully signed tag: {tag}")
    return report


async def sign_file(deps: Dependencies, file_path: str) -> Report:
    """Write an ASCII-armored detached signature next to a file."""
    if not (deps.cwd / file_path).exists():
        return failure(
            "File not found",
            f"File not found: {file_path}",
            file=file_path,
            action="sign_file",
        )

    signature_path = f"{file_path}.sig"
    outcome = await try_run(
        deps, "gpg", ["--detach-sign", "--armor", "--output", signature_path, file_path]
    )
    if not succeeded(outcome):
        report = _action_failure("sign_file", f"Failed to sign file: {file_path}", outcome)
        report.payload["file"] = file_path
        return report

    report = Report(
        payload={
            "action": "sign_file",
            "status": "success",
            "file": file_path,
            "signature": signature_path,
        }
    )
    report.status(Status.SUCCESS, f"Successfully signed file: {file_path}")
    report.text(f"📝 Signature saved to: {signature_path}")
    return report


async def verify_commits(deps: Dependencies) -> Report:
    """Show signature status of the five most recent commits."""
    precondition = require_repo(deps, "verify_commits")
    if precondition:
        return precondition

    outcome = await try_run(deps, "git", ["log", "--show-signature", "-n", "5", "--oneline"])
    if not succeeded(outcome):
        return _action_failure("verify_commits", "Failed to verify commit signatures", outcome)
    assert isinstance(outcome, CommandResult)

    report = Report(
        payload={
            "action": "verify_commits",
            "status": "success",
            "output": outcome.stdout.strip(),
        }
    )
    report.heading("🔍 Recent Commit Signatures")
    report.text(outcome.stdout.rstrip())
    return report


async def verify_tag(deps: Dependencies) -> Report:
    """Verify the signature of the most recent tag."""
    precondition = require_repo(deps, "verify_tags")
    if precondition:
        return precondition

    tag = await _latest_tag(deps)
    if not tag:
        return failure("No tags found", "No tags found in repository", action="verify_tags")

    outcome = await try_run(deps, "git", ["tag", "-v", tag])
    if not succeeded(outcome):
        report = _action_failure("verify_tags", f"Failed to verify tag signature: {tag}", outcome)
        report.payload["tag"] = tag
        return report
    assert isinstance(outcome, CommandResult)

    # git tag -v prints the tag object on stdout and the gpg verdict on stderr
    details = "\n".join(part for part in (outcome.stdout.strip(), outcome.stderr.strip()) if part)
    report = Report(
        payload={"action": "verify_tags", "status": "success", "tag": tag, "output": details}
    )
    report.heading("🏷️  Tag Signature Verification")
    report.status(Status.SUCCESS, f"Tag signature verified: {tag}")
    if details:
        report.text(details)
    return report


async def verify_file(deps: Dependencies, file_path: str) -> Report:
    """Verify a file against its detached ``.sig`` signature."""
    if not (deps.cwd / file_path).exists():
        return failure(
            "File not found",
            f"File not found: {file_path}",
            file=file_path,
            action="verify_file",
        )

    signature_path = f"{file_path}.sig"
    if not (deps.cwd / signature_path).exists():
        return failure(
            "Signature file not found",
            f"Signature file not found: {signature_path}",
            file=file_path,
            expected_signature=signature_path,
            action="verify_file",
        )

    outcome = await try_run(deps, "gpg", ["--verify", signature_path, file_path])
    if not succeeded(outcome):
        report = _action_failure(
            "verify_file", f"Failed to verify file signature: {file_path}", outcome
        )
        report.payload["file"] = file_path
        return report
    assert isinstance(outcome, CommandResult)

    # gpg reports verification results on stderr
    details = outcome.stderr.strip()
    report = Report(
        payload={
            "action": "verify_file",
            "status": "success",
            "file": file_path,
            "signature": signature_path,
            "verification_output": details,
        }
    )
    report.status(Status.SUCCESS, f"File signature verified: {file_path}")
    report.text("🔍 Verification details:")
    report.text(details)
    return report


async def _check_gpg(deps: Dependencies) -> SetupStep:
    outcome = await try_run(deps, "gpg", ["--version"])
    if isinstance(outcome, ExecError):
        return SetupStep(
            step="check_gpg",
            status="error",
            message="GPG is not installed",
            suggestion="Install GPG using your system package manager",
        )
    if not succeeded(outcome):
        return SetupStep(
            step="check_gpg",
            status="error",
            message="GPG is installed but not working",
            details=error_text(outcome),
        )
    return SetupStep(
        step="check_gpg",
        status="success",
        message="GPG is installed",
        details=first_line(outcome.stdout, default="unknown"),
    )


async def _check_keys(deps: Dependencies) -> SetupStep:
    outcome = await try_run(deps, "gpg", ["--list-secret-keys", "--keyid-format", "LONG"])
    if not succeeded(outcome):
        return SetupStep(step="check_keys", status="error", message="Failed to list GPG keys")
    assert isinstance(outcome, CommandResult)

    keys = outcome.stdout.strip()
    if not keys:
        return SetupStep(
            step="check_keys",
            status="warning",
            message="No GPG keys found",
            suggestion="Generate a new GPG key for signing",
        )
    return SetupStep(
        step="check_keys",
        status="success",
        message="GPG keys found",
        extra={"keys": keys},
    )


async def _check_git_config(deps: Dependencies) -> SetupStep:
    signing_key = await _config_value(deps, "user.signingkey")
    if signing_key:
        return SetupStep(
            step="check_git_config",
            status="success",
            message="Git signing key configured",
            extra={"signing_key": signing_key},
        )
    return SetupStep(
        step="check_git_config",
        status="warning",
        message="Git signing key not configured",
        suggestion="Configure with: git config --global user.signingkey <key-id>",
    )


async def _check_commit_signing(deps: Dependencies) -> SetupStep:
    if await _config_value(deps, "commit.gpgsign") == "true":
        return SetupStep(
            step="check_commit_signing",
            status="success",
            message="Automatic commit signing enabled",
        )
    return SetupStep(
        step="check_commit_signing",
        status="info",
        message="Automatic commit signing disabled",
        suggestion="Enable with: git config --global commit.gpgsign true",
    )


async def setup(deps: Dependencies) -> Report:
    """Walk through the signing setup and report each step."""
    logger.info("Checking GPG setup for Rust development")

    steps = [
        await _check_gpg(deps),
        await _check_keys(deps),
        await _check_git_config(deps),
        await _check_commit_signing(deps),
    ]
    has_errors = any(step.status == "error" for step in steps)

    report = Report(
        payload={
            "success": not has_errors,
            "action": "setup_gpg",
            "status": "error" if has_errors else "success",
            "setup_steps": [step.to_dict() for step in steps],
        },
        ok=not has_errors,
    )
    report.heading("🔑 GPG Setup for Rust Development")

    for step in steps:
        report.text(f"{icon(step.status)} {step.message}")
        if step.suggestion:
            report.suggest(step.suggestion, indent="  ")
        if step.details:
            report.text(f"  📋 {step.details}")

    if has_errors:
        report.payload["error"] = "GPG setup has errors"
    else:
        report.text()
        report.text("🎉 GPG setup looks good!")
        report.text()
        report.suggest("Quick commands:")
        for command in QUICK_COMMANDS:
            report.text(f"   • {command}")

    return report


async def run_gpg(deps: Dependencies, action: GpgAction, target: str | None = None) -> Report:
    """Dispatch a signing action.

    Args:
        deps: Dependencies container.
        action: sign, verify or setup.
        target: ``commit``, ``tag`` or a file path; unused for setup.
    """
    if action is GpgAction.SETUP:
        return await setup(deps)
    if not target:
        return failure(f"A target is required for '{action.value}'")

    logger.info("GPG %s: %s", action.value, target)
    if action is GpgAction.SIGN:
        if target == "commit":
            return await sign_commit(deps)
        if target == "tag":
            return await sign_tag(deps)
        return await sign_file(deps, target)

    if target == "commit":
        return await verify_commits(deps)
    if target == "tag":
        return await verify_tag(deps)
    return await verify_file(deps, target)
