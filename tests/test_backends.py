import subprocess
from unittest.mock import MagicMock, patch

import pytest
import requests

from pkgfzf.backends import apt, cargo, flatpak, get_available_backends, npm, snap


def lines(records):
    return [str(r) for r in records]


class TestApt:
    def test_sorted_unique_names(self):
        with patch(
            "pkgfzf.backends.apt.subprocess.check_output",
            return_value=b"zsh\nbash\n\nbash\n",
        ) as mock:
            assert lines(apt.list_packages()) == ["[apt] bash", "[apt] zsh"]
        assert mock.call_args[0][0] == ["apt-cache", "pkgnames"]

    def test_failure_lists_nothing(self):
        with patch(
            "pkgfzf.backends.apt.subprocess.check_output",
            side_effect=subprocess.CalledProcessError(1, "apt-cache"),
        ):
            assert apt.list_packages() == []


class TestFlatpak:
    OUTPUTS = {
        ("flatpak", "list", "--app", "--columns=application"): b"org.gimp.GIMP\n",
        ("flatpak", "remotes", "--columns=name"): b"flathub\nfedora\ninstalled\nodd]remote\n",
        ("flatpak", "remote-ls", "flathub", "--app", "--columns=application"):
            b"org.gimp.GIMP\norg.videolan.VLC\n",
        ("flatpak", "remote-ls", "fedora", "--app", "--columns=application"):
            b"org.videolan.VLC\norg.inkscape.Inkscape\n",
    }

    def fake_output(self, cmd, **kwargs):
        return self.OUTPUTS[tuple(cmd)]

    def test_installed_then_remotes(self):
        with patch("pkgfzf.backends.flatpak.subprocess.check_output", side_effect=self.fake_output):
            assert lines(flatpak.list_packages()) == [
                "[flatpak-installed] org.gimp.GIMP",
                "[flatpak-flathub] org.videolan.VLC",
                "[flatpak-fedora] org.inkscape.Inkscape",
            ]

    def test_remotes_that_break_the_tag_are_skipped(self):
        with patch("pkgfzf.backends.flatpak.subprocess.check_output", side_effect=self.fake_output):
            assert flatpak.remotes() == ["flathub", "fedora"]

    def test_failure_lists_nothing(self):
        with patch(
            "pkgfzf.backends.flatpak.subprocess.check_output",
            side_effect=subprocess.TimeoutExpired("flatpak", 60),
        ):
            assert flatpak.list_packages() == []


class TestSnap:
    LIST = (
        b"Name    Version   Rev   Tracking       Publisher   Notes\n"
        b"core20  20240111  2182  latest/stable  canonical**  base\n"
        b"hello   2.10      42    latest/stable  canonical**  -\n"
    )
    FIND = (
        b"Name     Version  Publisher   Notes  Summary\n"
        b"hello    2.10     canonical** -      GNU Hello\n"
        b"spotify  1.2.31   spotify**   -      Music for everyone\n"
    )

    def test_installed_then_featured(self):
        def fake_output(cmd, **kwargs):
            return self.LIST if cmd[1] == "list" else self.FIND

        with patch("pkgfzf.backends.snap.subprocess.check_output", side_effect=fake_output):
            assert lines(snap.list_packages()) == [
                "[snap-installed] core20",
                "[snap-installed] hello",
                "[snap] spotify",
            ]


class TestCargo:
    INSTALLED = b"ripgrep v14.1.0:\n    rg\nbat v0.24.0:\n    bat\n"

    def test_offline_lists_installed_only(self):
        with patch(
            "pkgfzf.backends.cargo.subprocess.check_output", return_value=self.INSTALLED
        ), patch("pkgfzf.backends.cargo.requests.get") as mock_get:
            assert lines(cargo.list_packages(offline=True)) == [
                "[cargo-installed] ripgrep",
                "[cargo-installed] bat",
            ]
        mock_get.assert_not_called()

    def test_popular_crates(self):
        response = MagicMock()
        response.json.return_value = {"crates": [{"name": "ripgrep"}, {"name": "serde"}]}
        with patch(
            "pkgfzf.backends.cargo.subprocess.check_output", return_value=self.INSTALLED
        ), patch("pkgfzf.backends.cargo.requests.get", return_value=response) as mock_get:
            assert lines(cargo.list_packages()) == [
                "[cargo-installed] ripgrep",
                "[cargo-installed] bat",
                "[cargo] serde",
            ]
        assert mock_get.call_args[1]["params"]["sort"] == "downloads"
        assert "User-Agent" in mock_get.call_args[1]["headers"]

    def test_non_object_response(self):
        response = MagicMock()
        response.json.return_value = ["not", "an", "object"]
        with patch("pkgfzf.backends.cargo.requests.get", return_value=response):
            assert cargo.popular() == []

    def test_network_failure(self):
        with patch(
            "pkgfzf.backends.cargo.requests.get", side_effect=requests.ConnectionError("down")
        ):
            assert cargo.popular() == []


class TestNpm:
    LS = b'{"dependencies": {"typescript": {"version": "5.4.0"}, "npm": {"version": "10.5.0"}}}'

    def test_installed_then_registry(self):
        response = MagicMock()
        response.json.return_value = {
            "objects": [{"package": {"name": "typescript"}}, {"package": {"name": "eslint"}}]
        }
        with patch(
            "pkgfzf.backends.npm.subprocess.run", return_value=MagicMock(stdout=self.LS)
        ), patch("pkgfzf.backends.npm.requests.get", return_value=response):
            assert lines(npm.list_packages()) == [
                "[npm-installed] npm",
                "[npm-installed] typescript",
                "[npm] eslint",
            ]

    @pytest.mark.parametrize("stdout", [b"", b"not json"])
    def test_unusable_ls_output(self, stdout):
        with patch("pkgfzf.backends.npm.subprocess.run", return_value=MagicMock(stdout=stdout)):
            assert npm.installed() == []

    def test_non_object_response(self):
        response = MagicMock()
        response.json.return_value = None
        with patch("pkgfzf.backends.npm.requests.get", return_value=response):
            assert npm.search() == []

    def test_offline(self):
        with patch(
            "pkgfzf.backends.npm.subprocess.run", return_value=MagicMock(stdout=self.LS)
        ), patch("pkgfzf.backends.npm.requests.get") as mock_get:
            assert len(npm.list_packages(offline=True)) == 2
        mock_get.assert_not_called()


class TestGetAvailableBackends:
    def test_skips_missing_binaries(self):
        with patch(
            "shutil.which",
            side_effect=lambda b: f"/usr/bin/{b}" if b in ("snap", "npm") else None,
        ):
            assert [n for n, _ in get_available_backends()] == ["snap", "npm"]

    def test_only(self):
        with patch("shutil.which", return_value="/usr/bin/x"):
            assert [n for n, _ in get_available_backends(["npm", "apt"])] == ["apt", "npm"]
