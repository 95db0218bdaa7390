import json
import subprocess

import pytest

from conftest import FakeGit, FakeKeygen
from gitid.cli.main import create_parser, main


@pytest.fixture
def tools(monkeypatch):
    """Route git and ssh-keygen calls to fakes."""
    git = FakeGit()
    keygen = FakeKeygen()

    def run(cmd, **kwargs):
        if cmd[0] == "git":
            return git(cmd, **kwargs)
        if cmd[0] == "ssh-keygen":
            return keygen(cmd, **kwargs)
        raise AssertionError(f"unexpected command {cmd}")

    monkeypatch.setattr(subprocess, "run", run)
    return git, keygen


class TestParser:

    def test_setup_flags(self):
        args = create_parser().parse_args(
            ["setup", "-i", "work", "-u", "me", "-r", "git@h:a/b.git", "-p", "x"]
        )
        assert (args.identity, args.user, args.repo, args.prefix) == ("work", "me", "git@h:a/b.git", "x")

    def test_setup_requires_identity(self):
        with pytest.raises(SystemExit):
            create_parser().parse_args(["setup"])

    def test_no_command_prints_help(self, capsys):
        assert main([]) == 0
        assert "usage: gitid" in capsys.readouterr().out


class TestSetupCommand:

    def test_setup_in_repo(self, home, tools, capsys):
        git, keygen = tools

        assert main(["setup", "-i", "llc"]) == 0

        out = capsys.readouterr().out
        assert "Remote origin set to git@gitid-llc.github.com:acme/widget.git" in out
        assert "ssh-ed25519 AAAAFAKE gitid-llc.github.com" in out
        assert git.url == "git@gitid-llc.github.com:acme/widget.git"
        assert (home / ".ssh" / "id_gitid_llc").exists()
        assert "Host gitid-llc.github.com" in (home / ".ssh" / "config").read_text()

    def test_setup_with_explicit_repo(self, home, tools, capsys):
        git, _ = tools

        assert main(["setup", "-i", "llc", "-r", "git@github.com:acme/widget.git"]) == 0

        assert git.calls == []
        assert "Use this remote URL: git@gitid-llc.github.com:acme/widget.git" in capsys.readouterr().out

    def test_invalid_identity_exits_1(self, home, tools, capsys):
        assert main(["setup", "-i", "gitid-llc"]) == 1
        assert "prefix" in capsys.readouterr().err
        assert not (home / ".ssh" / "config").exists()

    def test_https_remote_exits_1(self, home, tools, capsys):
        tools[0].url = "https://github.com/acme/widget.git"
        assert main(["setup", "-i", "llc"]) == 1
        assert "HTTPS" in capsys.readouterr().err

    def test_key_generation_failure_exits_1(self, home, tools):
        tools[1].returncode = 1
        assert main(["setup", "-i", "llc"]) == 1

    def test_quiet_suppresses_error(self, home, tools, capsys):
        assert main(["-q", "setup", "-i", "gitid"]) == 1
        assert capsys.readouterr().err == ""


class TestResolveCommand:

    def test_prints_url(self, home, capsys):
        assert main(["resolve", "git@github.com:acme/widget.git", "-i", "llc"]) == 0
        assert capsys.readouterr().out.strip() == "git@gitid-llc.github.com:acme/widget.git"

    def test_prints_hostname(self, home, capsys):
        assert main(["resolve", "git@github.com:acme/widget.git", "-i", "llc", "--hostname"]) == 0
        assert capsys.readouterr().out.strip() == "gitid-llc.github.com"

    def test_codecommit_exits_1(self, home):
        assert main(["resolve", "codecommit::us-east-1://widget", "-i", "llc"]) == 1

    def test_writes_no_files(self, home):
        assert main(["resolve", "git@github.com:acme/widget.git", "-i", "llc"]) == 0
        assert list(home.iterdir()) == []


class TestListCommand:

    def test_lists_identity_hosts(self, home, tools, capsys):
        main(["setup", "-i", "llc"])
        capsys.readouterr()

        assert main(["list", "--json"]) == 0
        hosts = json.loads(capsys.readouterr().out)
        assert [h["alias"] for h in hosts] == ["gitid-llc.github.com"]
        assert hosts[0]["hostname"] == "github.com"

    def test_empty(self, home, capsys):
        assert main(["list"]) == 0
        assert "No 'gitid-' hosts" in capsys.readouterr().out


class TestConfigCommand:

    def test_set_and_show(self, home, capsys):
        assert main(["config", "set", "prefix", "me"]) == 0
        capsys.readouterr()

        assert main(["config", "--json"]) == 0
        assert json.loads(capsys.readouterr().out)["prefix"] == "me"

    def test_unknown_key(self, home, capsys):
        assert main(["config", "set", "color", "blue"]) == 1
        assert "Unknown config key" in capsys.readouterr().err
