import pytest

from conftest import FakeGit
from gitid.errors import GitCommandFailed, NotAGitRepository
from gitid.remote.git import GitRepository


class TestGitRepository:

    def test_is_work_tree(self):
        assert GitRepository(runner=FakeGit()).is_work_tree()
        assert not GitRepository(runner=FakeGit(work_tree=False)).is_work_tree()

    def test_get_remote_url(self, fake_git):
        assert GitRepository(runner=fake_git).get_remote_url() == "git@github.com:acme/widget.git"
        assert fake_git.calls[-1] == ["git", "remote", "get-url", "origin"]

    def test_get_remote_url_outside_repo(self):
        with pytest.raises(NotAGitRepository):
            GitRepository(runner=FakeGit(work_tree=False)).get_remote_url()

    def test_get_missing_remote(self):
        with pytest.raises(GitCommandFailed, match="origin"):
            GitRepository(runner=FakeGit(url=None)).get_remote_url()

    def test_set_remote_url(self, fake_git):
        GitRepository(runner=fake_git).set_remote_url("git@gitid-llc.github.com:acme/widget.git")
        assert fake_git.calls[-1] == [
            "git", "remote", "set-url", "origin", "git@gitid-llc.github.com:acme/widget.git",
        ]
        assert fake_git.url == "git@gitid-llc.github.com:acme/widget.git"

    def test_git_missing(self):
        def runner(cmd, **kwargs):
            raise FileNotFoundError(2, "No such file or directory", "git")

        with pytest.raises(GitCommandFailed):
            GitRepository(runner=runner).is_work_tree()
