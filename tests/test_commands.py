"""
Tests for published commands and the reference editor session.
"""

import numpy as np
import pytest

from bonewrap import (
    EditorSession,
    Host,
    Project,
    available_commands,
    project_to_dict,
    run_command,
    transaction,
)


@pytest.fixture
def session():
    """Project with one illegal cube inside a group and one legal cube."""
    project = Project()
    body = project.add_pivot("body")
    project.add_leaf("arm", rotation=[0, 0, 30], origin=[2, 0, 0], parent=body)
    project.add_leaf("leg", rotation=[0, 0, 0], parent=body)
    return EditorSession(project)


def test_published_commands():
    """Test every required command is published."""
    commands = available_commands()
    for name in (
        "fix-illegal-wrap",
        "force-wrap-zero",
        "add-zero-rotation-group",
        "unwrap-by-name",
        "unwrap-any-recursive",
    ):
        assert name in commands


def test_unknown_command(session):
    """Test unknown commands raise KeyError listing valid options."""
    with pytest.raises(KeyError, match="Valid options are"):
        run_command("unwrap-everything", session)


@pytest.mark.parametrize("name", available_commands())
def test_each_command_commits_at_most_one_step(session, name):
    """Test every command is a single undo step (or a no-op)."""
    before = project_to_dict(session.project)

    assert run_command(name, session) is None

    assert len(session.undo_stack) <= 1
    assert not session.in_transaction
    if session.undo_stack:
        session.undo()
    assert project_to_dict(session.project) == before


def test_fix_illegal_wrap_is_idempotent(session):
    """Test re-running the wrap finds nothing left to fix."""
    run_command("fix-illegal-wrap", session)
    after_first = project_to_dict(session.project)

    run_command("fix-illegal-wrap", session)

    assert len(session.undo_stack) == 1
    assert project_to_dict(session.project) == after_first
    assert session.notices[-1] == "No cubes require processing (selection or project)."


def test_wrap_then_unwrap_by_name(session):
    """Test the published wrap/unwrap pair restores the original tree."""
    before = project_to_dict(session.project)

    run_command("fix-illegal-wrap", session)
    assert session.project.find("arm_bone_1") is not None

    run_command("unwrap-by-name", session)

    after = project_to_dict(session.project)
    arm_before = before["outliner"][0]["children"][0]
    arm_after = after["outliner"][0]["children"][0]
    assert arm_after["name"] == "arm"
    np.testing.assert_allclose(arm_after["rotation"], arm_before["rotation"], atol=1e-9)
    np.testing.assert_allclose(arm_after["origin"], arm_before["origin"], atol=1e-9)
    assert len(session.undo_stack) == 2


def test_undo_redo(session):
    """Test redo re-applies an undone batch."""
    run_command("fix-illegal-wrap", session)
    wrapped = project_to_dict(session.project)

    assert session.undo()
    assert session.project.find("arm_bone_1") is None
    assert session.redo()
    assert project_to_dict(session.project) == wrapped
    assert not session.redo()


# ============================================================================
# Transactions
# ============================================================================


def test_session_is_host():
    """Test the reference session satisfies the host protocol."""
    assert isinstance(EditorSession(), Host)


def test_transaction_commits_and_redraws(session):
    with transaction(session, [], "rename"):
        session.project.find("arm").name = "renamed"

    assert session.redraw_count == 1
    assert [label for label, _ in session.undo_stack] == ["rename"]


def test_transaction_rolls_back_on_error(session):
    before = project_to_dict(session.project)

    with pytest.raises(RuntimeError, match="boom"):
        with transaction(session, [], "broken"):
            session.project.add_leaf("stray")
            raise RuntimeError("boom")

    assert project_to_dict(session.project) == before
    assert not session.in_transaction
    assert session.undo_stack == []
    assert session.redraw_count == 0


def test_transactions_do_not_nest(session):
    session.begin([], "outer")
    with pytest.raises(RuntimeError, match="still open"):
        session.begin([], "inner")
    session.end()

    with pytest.raises(RuntimeError, match="No open transaction"):
        session.end()


def test_selection_drops_deleted_nodes(session):
    """Test deleted groups disappear from the selection after a batch."""
    project = session.project
    session.select(project.find("body").handle)

    run_command("unwrap-any", session)

    assert session.selection() == []
