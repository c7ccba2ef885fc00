"""Tests for the ci-operator configuration scanner."""

import os
from pathlib import Path

import pytest

from peribolos_sync.ciop.scanner import (
    CIOP_CONFIG_IN_REPO_PATH,
    CIOperatorConfigScanner,
    info_from_path,
)
from peribolos_sync.core.cancellation import CancellationToken
from peribolos_sync.core.exceptions import ConfigScanError, OperationCancelled


@pytest.mark.unit
class TestInfoFromPath:
    """Tests for deriving location metadata from file paths."""

    def test_plain_branch(self) -> None:
        info = info_from_path(Path("config/openshift/origin/openshift-origin-master.yaml"))
        assert (info.org, info.repo, info.branch, info.variant) == ("openshift", "origin", "master", "")

    def test_branch_with_dashes_and_variant(self) -> None:
        info = info_from_path(
            Path("config/openshift/origin/openshift-origin-release-4.6__okd.yaml")
        )
        assert info.branch == "release-4.6"
        assert info.variant == "okd"

    def test_branch_containing_double_underscore(self) -> None:
        info = info_from_path(
            Path("config/openshift/origin/openshift-origin-feature__x__okd.yaml")
        )
        assert info.branch == "feature__x"
        assert info.variant == "okd"

    def test_mismatched_file_name(self) -> None:
        with pytest.raises(ValueError, match="does not start with"):
            info_from_path(Path("config/openshift/origin/other-name-master.yaml"))


@pytest.mark.unit
class TestCIOperatorConfigScanner:
    """Tests for CIOperatorConfigScanner."""

    def test_visits_every_yaml_file(self, release_repo: Path, write_ciop_config) -> None:
        write_ciop_config("openshift", "origin", "master")
        write_ciop_config("openshift", "origin", "release-4.6")
        write_ciop_config("openshift", "installer", "master", variant="okd")
        (release_repo / CIOP_CONFIG_IN_REPO_PATH / "openshift" / "origin" / "OWNERS").write_text(
            "approvers: []\n"
        )

        scanner = CIOperatorConfigScanner(release_repo / CIOP_CONFIG_IN_REPO_PATH)
        seen = []
        count = scanner.operate(lambda config, info: seen.append((info.org, info.repo, info.branch)))

        assert count == 3
        assert sorted(seen) == [
            ("openshift", "installer", "master"),
            ("openshift", "origin", "master"),
            ("openshift", "origin", "release-4.6"),
        ]

    def test_missing_root(self, tmp_path: Path) -> None:
        scanner = CIOperatorConfigScanner(tmp_path / "nope")
        with pytest.raises(ConfigScanError, match="does not exist"):
            scanner.operate(lambda config, info: None)

    def test_malformed_yaml_fails_whole_scan(self, release_repo: Path, write_ciop_config) -> None:
        write_ciop_config("openshift", "origin", "master")
        bad = write_ciop_config("openshift", "broken", "master", raw="promotion: [unclosed\n")

        scanner = CIOperatorConfigScanner(release_repo / CIOP_CONFIG_IN_REPO_PATH)
        with pytest.raises(ConfigScanError) as exc_info:
            scanner.operate(lambda config, info: None)
        assert exc_info.value.details["path"] == str(bad)

    def test_non_mapping_document(self, release_repo: Path, write_ciop_config) -> None:
        write_ciop_config("openshift", "origin", "master", raw="- just\n- a list\n")
        scanner = CIOperatorConfigScanner(release_repo / CIOP_CONFIG_IN_REPO_PATH)
        with pytest.raises(ConfigScanError, match="is not a mapping"):
            scanner.operate(lambda config, info: None)

    def test_misnamed_file(self, release_repo: Path) -> None:
        directory = release_repo / CIOP_CONFIG_IN_REPO_PATH / "openshift" / "origin"
        directory.mkdir(parents=True)
        (directory / "wrong-name.yaml").write_text("{}\n")
        scanner = CIOperatorConfigScanner(release_repo / CIOP_CONFIG_IN_REPO_PATH)
        with pytest.raises(ConfigScanError, match="invalid ci-operator config"):
            scanner.operate(lambda config, info: None)

    def test_cancelled_scan(self, release_repo: Path, write_ciop_config) -> None:
        write_ciop_config("openshift", "origin", "master")
        token = CancellationToken()
        token.cancel()
        scanner = CIOperatorConfigScanner(release_repo / CIOP_CONFIG_IN_REPO_PATH, cancellation=token)
        with pytest.raises(OperationCancelled):
            scanner.operate(lambda config, info: None)

    def test_file_outside_org_repo_layout(self, release_repo: Path) -> None:
        (release_repo / CIOP_CONFIG_IN_REPO_PATH / "stray.yaml").write_text("{}\n")
        scanner = CIOperatorConfigScanner(release_repo / CIOP_CONFIG_IN_REPO_PATH)
        with pytest.raises(ConfigScanError, match="layout"):
            scanner.operate(lambda config, info: None)

    def test_unlistable_directory_fails_whole_scan(
        self, release_repo: Path, write_ciop_config, monkeypatch: pytest.MonkeyPatch
    ) -> None:
        write_ciop_config("openshift", "origin", "master", promotion={"namespace": "ocp"})
        write_ciop_config("openshift", "installer", "master", promotion={"namespace": "ocp"})
        blocked = release_repo / CIOP_CONFIG_IN_REPO_PATH / "openshift" / "installer"
        real_scandir = os.scandir

        def _scandir(path="."):
            if Path(path) == blocked:
                raise PermissionError(13, "Permission denied", str(path))
            return real_scandir(path)

        monkeypatch.setattr(os, "scandir", _scandir)
        scanner = CIOperatorConfigScanner(release_repo / CIOP_CONFIG_IN_REPO_PATH)
        seen = []
        with pytest.raises(ConfigScanError, match="failed to walk") as exc_info:
            scanner.operate(lambda config, info: seen.append(info.repo))
        assert exc_info.value.details["path"] == str(blocked)
        assert seen == []
