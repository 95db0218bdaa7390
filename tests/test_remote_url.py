import pytest

from gitid.errors import UnrecognizedFormat, UnsupportedScheme
from gitid.remote.url import (
    RemoteKind,
    bare_hostname,
    parse_aliased_shorthand,
    parse_codecommit,
    parse_https,
    parse_remote,
    parse_ssh_shorthand,
    resolve_remote,
    strip_alias,
)


class TestAliasedShorthand:

    def test_parses_alias_and_real_host(self):
        ref = parse_aliased_shorthand("git@gitid-llc.github.com:acme/widget.git", "gitid")
        assert ref.kind is RemoteKind.ALIASED_SHORTHAND
        assert ref.user == "git"
        assert ref.alias == "gitid-llc"
        assert ref.host == "github.com"
        assert ref.path == "acme"
        assert ref.repo == "widget"
        assert ref.extension == ".git"

    def test_plain_host_does_not_match(self):
        assert parse_aliased_shorthand("git@github.com:acme/widget.git", "gitid") is None

    def test_other_prefix_does_not_match(self):
        assert parse_aliased_shorthand("git@me-llc.github.com:acme/widget.git", "gitid") is None


class TestSshShorthand:

    def test_parses_nested_path(self):
        ref = parse_ssh_shorthand("git@gitlab.com:group/sub/project.git", "gitid")
        assert ref.host == "gitlab.com"
        assert ref.path == "group/sub"
        assert ref.repo == "project"

    def test_without_git_suffix(self):
        ref = parse_ssh_shorthand("git@github.com:acme/widget", "gitid")
        assert ref.repo == "widget"
        assert ref.extension == ""

    @pytest.mark.parametrize("url", [
        "ssh://git@github.com/acme/widget.git",
        "https://github.com/acme/widget.git",
        "github.com:acme/widget.git",
        "git@github.com:widget.git",
    ])
    def test_rejects_non_shorthand(self, url):
        assert parse_ssh_shorthand(url, "gitid") is None


class TestHttps:

    @pytest.mark.parametrize("url", [
        "https://github.com/acme/widget.git",
        "https://user@github.com/acme/widget.git",
        "http://git.example.com:8080/acme/widget",
    ])
    def test_matches(self, url):
        assert parse_https(url, "gitid").kind is RemoteKind.HTTPS

    def test_ssh_shorthand_is_not_https(self):
        assert parse_https("git@github.com:acme/widget.git", "gitid") is None


class TestCodeCommit:

    @pytest.mark.parametrize("url", [
        "codecommit::us-east-1://widget",
        "codecommit://widget",
        "codecommit::eu-west-2://profile@widget",
    ])
    def test_matches(self, url):
        assert parse_codecommit(url, "gitid").kind is RemoteKind.CODECOMMIT

    def test_https_is_not_codecommit(self):
        assert parse_codecommit("https://github.com/acme/widget.git", "gitid") is None


class TestParseRemote:

    def test_aliased_wins_over_plain(self):
        ref = parse_remote("git@gitid-llc.github.com:u/r.git", "gitid")
        assert ref.kind is RemoteKind.ALIASED_SHORTHAND

    @pytest.mark.parametrize("url", [
        "",
        "not a url",
        "ssh://git@github.com/acme/widget.git",
        "/srv/git/widget.git",
    ])
    def test_unrecognized(self, url):
        with pytest.raises(UnrecognizedFormat):
            parse_remote(url, "gitid")


class TestResolveRemote:

    def test_plain_url_is_rewritten(self):
        resolution = resolve_remote("git@github.com:acme/widget.git", "gitid", "gitid-llc")
        assert resolution.rewrite_needed
        assert resolution.url == "git@gitid-llc.github.com:acme/widget.git"
        assert resolution.hostname == "gitid-llc.github.com"

    def test_bare_hostname(self):
        assert bare_hostname("git@github.com:acme/widget.git", "gitid", "gitid-llc") == "gitid-llc.github.com"

    def test_same_identity_is_a_no_op(self):
        url = "git@gitid-llc.github.com:u/r.git"
        resolution = resolve_remote(url, "gitid", "gitid-llc")
        assert not resolution.rewrite_needed
        assert resolution.url == url
        assert resolution.hostname == "gitid-llc.github.com"

    def test_no_double_prefix(self):
        resolution = resolve_remote("git@gitid-llc.github.com:u/r.git", "gitid", "gitid-llc")
        assert "gitid-gitid" not in resolution.hostname
        assert "gitid-gitid" not in resolution.url

    def test_other_identity_is_replaced(self):
        resolution = resolve_remote("git@gitid-home.github.com:acme/widget.git", "gitid", "gitid-work")
        assert resolution.rewrite_needed
        assert resolution.url == "git@gitid-work.github.com:acme/widget.git"
        assert resolution.hostname == "gitid-work.github.com"

    def test_preserves_user_path_and_missing_suffix(self):
        resolution = resolve_remote("deploy@git.example.com:team/tools/cli", "gitid", "gitid-ci")
        assert resolution.url == "deploy@gitid-ci.git.example.com:team/tools/cli"

    def test_rewritten_url_is_stable(self):
        first = resolve_remote("git@github.com:acme/widget.git", "gitid", "gitid-llc")
        second = resolve_remote(first.url, "gitid", "gitid-llc")
        assert not second.rewrite_needed
        assert second.url == first.url

    def test_https_rejected(self):
        with pytest.raises(UnsupportedScheme):
            resolve_remote("https://github.com/acme/widget.git", "gitid", "gitid-llc")

    def test_codecommit_rejected(self):
        with pytest.raises(UnsupportedScheme):
            resolve_remote("codecommit::us-east-1://widget", "gitid", "gitid-llc")

    def test_unrecognized_carries_url(self):
        with pytest.raises(UnrecognizedFormat) as excinfo:
            resolve_remote("file:///srv/widget.git", "gitid", "gitid-llc")
        assert excinfo.value.url == "file:///srv/widget.git"


class TestStripAlias:

    def test_strips_alias_segment(self):
        assert strip_alias("gitid-llc.github.com", "gitid") == "github.com"

    def test_leaves_plain_host(self):
        assert strip_alias("github.com", "gitid") == "github.com"

    def test_only_first_segment(self):
        assert strip_alias("gitid-a.gitid-b.example.com", "gitid") == "gitid-b.example.com"
