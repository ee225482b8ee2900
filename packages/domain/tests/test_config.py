"""Tests for splitter configuration and YAML loading."""

import pytest
from pydantic import ValidationError as PydanticValidationError

from payout_domain import PaymentSplitter, RecordingAssetTransfer
from payout_domain.schemas import PayeeCFG, SplitterCFG, load_splitter_config


CONFIG_YAML = """\
owner: treasury_admin
duplicate_fee_policy: additive
payees:
  - identity: alice
    shares: 1
  - identity: bob
    shares: 3
"""


def test_load_splitter_config(tmp_path):
    path = tmp_path / "splitter.yaml"
    path.write_text(CONFIG_YAML, encoding="utf-8")

    config = load_splitter_config(path)

    assert config.owner == "treasury_admin"
    assert config.duplicate_fee_policy == "additive"
    assert [(p.identity, p.shares) for p in config.payees] == [("alice", 1), ("bob", 3)]


def test_loaded_config_builds_working_splitter(tmp_path):
    path = tmp_path / "splitter.yaml"
    path.write_text(CONFIG_YAML, encoding="utf-8")

    splitter = PaymentSplitter.from_config(load_splitter_config(path), RecordingAssetTransfer())
    splitter.receive("sponsor", 100)

    assert splitter.release("bob", "bob") == 75


def test_load_rejects_non_mapping(tmp_path):
    path = tmp_path / "splitter.yaml"
    path.write_text("- just\n- a list\n", encoding="utf-8")

    with pytest.raises(ValueError, match="must be a YAML mapping"):
        load_splitter_config(path)


def test_load_missing_file(tmp_path):
    with pytest.raises(FileNotFoundError):
        load_splitter_config(tmp_path / "absent.yaml")


def test_unknown_policy_rejected(tmp_path):
    path = tmp_path / "splitter.yaml"
    path.write_text("owner: admin\nduplicate_fee_policy: overwrite\n", encoding="utf-8")

    with pytest.raises(PydanticValidationError):
        load_splitter_config(path)


class TestSplitterCFGValidation:
    """Test roster validation in SplitterCFG."""

    def test_defaults(self):
        config = SplitterCFG(owner="admin")
        assert config.duplicate_fee_policy == "reject"
        assert config.payees is None

    def test_empty_roster(self):
        with pytest.raises(PydanticValidationError, match="at least one entry"):
            SplitterCFG(owner="admin", payees=[])

    def test_duplicate_roster(self):
        with pytest.raises(PydanticValidationError, match="Duplicate payees"):
            SplitterCFG(
                owner="admin",
                payees=[PayeeCFG(identity="alice", shares=1), PayeeCFG(identity="alice", shares=2)],
            )

    def test_non_positive_shares(self):
        with pytest.raises(PydanticValidationError):
            PayeeCFG(identity="alice", shares=0)

    def test_missing_owner(self):
        with pytest.raises(PydanticValidationError):
            SplitterCFG()
