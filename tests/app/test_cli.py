from __future__ import annotations

import json
from pathlib import Path  # noqa: TC003

import pytest

from bumpkit.app import reconcile_branch, write_changes
from bumpkit.domain.model import BranchConfig, FileChange, Upgrade
from bumpkit.domain.reconciliation import InvalidUpgradeError, ReconciliationOutcome
from bumpkit.domain.registry import HandlerRegistry
from bumpkit.ui import cli as cli_module


def _write_config(tmp_path: Path, **overrides: object) -> Path:
    config: dict[str, object] = {
        "baseBranch": "main",
        "branchName": "renovate/lib",
        "upgrades": [
            {
                "manager": "pip",
                "packageFile": "requirements.txt",
                "depName": "lib",
                "currentValue": "1.0.0",
                "newVersion": "1.1.0",
            }
        ],
    }
    config.update(overrides)
    path = tmp_path / "branch.json"
    path.write_text(json.dumps(config), encoding="utf-8")
    return path


@pytest.fixture
def repo(tmp_path: Path) -> Path:
    root = tmp_path / "repo"
    root.mkdir()
    (root / "requirements.txt").write_text("lib==1.0.0\n", encoding="utf-8")
    return root


@pytest.fixture(autouse=True)
def _no_entry_points(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setattr(HandlerRegistry, "from_entry_points", classmethod(lambda cls: cls()))


def test_reconcile_prints_outcome(
    tmp_path: Path, repo: Path, capsys: pytest.CaptureFixture[str]
) -> None:
    config_path = _write_config(tmp_path)

    cli_module.main(["reconcile", str(config_path), "--repo-dir", str(repo)])

    payload = json.loads(capsys.readouterr().out)
    assert payload["updatedPackageFiles"] == [
        {
            "type": "addition",
            "path": "requirements.txt",
            "contents": "lib==1.1.0\n",
            "encoding": None,
        }
    ]
    assert (repo / "requirements.txt").read_text(encoding="utf-8") == "lib==1.0.0\n"


def test_reconcile_writes_output_file_and_changes(tmp_path: Path, repo: Path) -> None:
    config_path = _write_config(tmp_path)
    output = tmp_path / "outcome.json"

    cli_module.main(
        [
            "reconcile",
            str(config_path),
            "--repo-dir",
            str(repo),
            "--output",
            str(output),
            "--write",
        ]
    )

    assert json.loads(output.read_text(encoding="utf-8"))["reuseExistingBranch"] is None
    assert (repo / "requirements.txt").read_text(encoding="utf-8") == "lib==1.1.0\n"


def test_reused_branch_reads_its_worktree(
    tmp_path: Path, repo: Path, capsys: pytest.CaptureFixture[str]
) -> None:
    branch_dir = tmp_path / "branch"
    branch_dir.mkdir()
    (branch_dir / "requirements.txt").write_text("lib==1.0.0\nextra==3.0\n", encoding="utf-8")
    config_path = _write_config(tmp_path, reuseExistingBranch=True)

    cli_module.main(
        [
            "reconcile",
            str(config_path),
            "--repo-dir",
            str(repo),
            "--worktree",
            f"renovate/lib={branch_dir}",
        ]
    )

    payload = json.loads(capsys.readouterr().out)
    assert payload["updatedPackageFiles"][0]["contents"] == "lib==1.1.0\nextra==3.0\n"
    assert payload["reuseExistingBranch"] is True


def test_worktree_with_remote_exits_with_2(tmp_path: Path) -> None:
    config_path = _write_config(tmp_path)

    with pytest.raises(SystemExit) as excinfo:
        cli_module.main(["reconcile", str(config_path), "--remote", "--worktree", "b=dir"])

    assert excinfo.value.code == 2


def test_malformed_worktree_exits_with_2(tmp_path: Path) -> None:
    config_path = _write_config(tmp_path)

    with pytest.raises(SystemExit) as excinfo:
        cli_module.main(["reconcile", str(config_path), "--worktree", "no-separator"])

    assert excinfo.value.code == 2


def test_missing_config_file_exits_with_2(tmp_path: Path) -> None:
    with pytest.raises(SystemExit) as excinfo:
        cli_module.main(["reconcile", str(tmp_path / "missing.json")])

    assert excinfo.value.code == 2


def test_write_with_remote_exits_with_2(tmp_path: Path) -> None:
    config_path = _write_config(tmp_path)

    with pytest.raises(SystemExit) as excinfo:
        cli_module.main(["reconcile", str(config_path), "--remote", "--write"])

    assert excinfo.value.code == 2


def test_upgrade_without_branch_name_exits_with_2(tmp_path: Path, repo: Path) -> None:
    config_path = _write_config(tmp_path, branchName=None)

    with pytest.raises(SystemExit) as excinfo:
        cli_module.main(["reconcile", str(config_path), "--repo-dir", str(repo)])

    assert excinfo.value.code == 2


def test_failed_edit_exits_with_1(tmp_path: Path, repo: Path) -> None:
    (repo / "requirements.txt").write_text("lib==2.0.0\n", encoding="utf-8")
    config_path = _write_config(tmp_path)

    with pytest.raises(SystemExit) as excinfo:
        cli_module.main(["reconcile", str(config_path), "--repo-dir", str(repo)])

    assert excinfo.value.code == 1


def test_reconcile_branch_validates_before_reading(repo: Path) -> None:
    class _FailingSource:
        def get_file(self, path: str, *, branch: str | None = None) -> str | None:
            raise AssertionError("should not read")

    config = BranchConfig(base_branch="main")

    assert reconcile_branch(config, source=_FailingSource()) == ReconciliationOutcome()
    with pytest.raises(InvalidUpgradeError):
        reconcile_branch(
            BranchConfig(
                base_branch="main",
                upgrades=(Upgrade(handler="pip", package_file="requirements.txt"),),
            ),
            source=_FailingSource(),
        )


def test_write_changes_applies_additions_and_deletions(repo: Path) -> None:
    (repo / "old.lock").write_text("stale", encoding="utf-8")

    touched = write_changes(
        repo,
        [
            FileChange(path="nested/new.lock", contents="fresh"),
            FileChange(path="bin/tool", contents=b"\x00"),
            FileChange.deletion("old.lock"),
        ],
    )

    assert len(touched) == 3
    assert (repo / "nested" / "new.lock").read_text(encoding="utf-8") == "fresh"
    assert (repo / "bin" / "tool").read_bytes() == b"\x00"
    assert not (repo / "old.lock").exists()
