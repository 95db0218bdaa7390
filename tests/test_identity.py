import pytest

from gitid.core.identity import normalize_identity
from gitid.errors import InvalidIdentity


class TestNormalizeIdentity:

    def test_display_and_key_name(self):
        identity = normalize_identity("llc", "gitid")
        assert identity.display == "gitid-llc"
        assert identity.key_name == "id_gitid_llc"

    def test_lowercases_and_converts_hyphens_for_key_only(self):
        identity = normalize_identity("Acme-Work", "gitid")
        assert identity.display == "gitid-acme-work"
        assert identity.key_name == "id_gitid_acme_work"

    def test_trims_whitespace(self):
        assert normalize_identity("  work \n", "gitid").display == "gitid-work"

    def test_deterministic(self):
        assert normalize_identity("Work", "gitid") == normalize_identity("Work", "gitid")

    def test_custom_prefix(self):
        identity = normalize_identity("work", "me")
        assert identity.display == "me-work"
        assert identity.key_name == "id_me_work"

    @pytest.mark.parametrize("raw", ["", "   ", None])
    def test_empty_rejected(self, raw):
        with pytest.raises(InvalidIdentity):
            normalize_identity(raw, "gitid")

    @pytest.mark.parametrize("raw", ["gitid-llc", "GITID", "git-id-work", "mygitid"])
    def test_prefix_in_identity_rejected(self, raw):
        with pytest.raises(InvalidIdentity, match="prefix"):
            normalize_identity(raw, "gitid")

    @pytest.mark.parametrize("raw", ["a.b", "a/b", "a b", "../x"])
    def test_characters_outside_hostname_label_rejected(self, raw):
        with pytest.raises(InvalidIdentity):
            normalize_identity(raw, "gitid")

    def test_empty_prefix_rejected(self):
        with pytest.raises(InvalidIdentity):
            normalize_identity("work", "")
