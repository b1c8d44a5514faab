import pytest

from etcdjoin.errors import StateInspectionError
from etcdjoin.state.inspector import StateInspector


def test_fresh_data_dir(tmp_path):
    assert StateInspector(tmp_path).has_prior_role() is False


def test_missing_data_dir(tmp_path):
    assert StateInspector(tmp_path / "nope").has_prior_role() is False


@pytest.mark.parametrize("marker", ["member", "proxy"])
def test_marker_present(tmp_path, marker):
    (tmp_path / marker).mkdir()
    inspector = StateInspector(tmp_path)
    assert inspector.has_prior_role() is True
    assert inspector.prior_role_marker() == tmp_path / marker


def test_stat_error_is_fatal(tmp_path):
    # data dir is a regular file, so stat on a child fails with ENOTDIR
    f = tmp_path / "etcd"
    f.write_text("")
    with pytest.raises(StateInspectionError):
        StateInspector(f).has_prior_role()
