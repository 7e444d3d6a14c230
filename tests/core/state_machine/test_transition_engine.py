"""
Tests for event-driven transitions and direct state jumps.
"""

import logging
from unittest.mock import MagicMock

import pytest

from statize import (
    InvalidEventError,
    InvalidStateError,
    InvalidStateForEventError,
    Stateful,
    TransitionPhase,
    UserHaltError,
    stateful,
)


def make_host(callback=None):
    """Build a host type whose 'close' event carries ``callback``."""

    class Host(Stateful):
        machine = stateful()
        machine.event("close", {"open": "closed"}, callback)
        machine.event("reopen", {"closed": "open"})

        def __init__(self):
            self.state = None
            self.init_state()

    return Host()


class TestWorkflowScenario:
    """The open/closed/kiv/archived workflow."""

    def test_event_sequence(self, target):
        """Test the documented sequence of events."""
        # Act & Assert
        assert target.current_state() == "open"
        assert target.trigger_event("close") == "closed"
        assert target.trigger_event("kiv") == "kiv"
        assert target.trigger_event("reopen") == "open"
        assert target.trigger_event("kiv") == "kiv"
        with pytest.raises(InvalidStateForEventError) as excinfo:
            target.trigger_event("close")
        assert excinfo.value.state == "kiv"
        assert target.current_state() == "kiv"

    def test_every_declared_pair_reaches_its_destination(self, target_cls):
        """Test all (event, from) pairs without a vetoing callback."""
        # Arrange
        table = target_cls.state_registry().event_states_table()
        callbacks = target_cls.state_registry().event_callback_table()

        for event, mapping in table.items():
            if event in callbacks:
                continue
            for from_state, to_state in mapping.items():
                host = target_cls()
                host.state = from_state

                # Act
                host.trigger_event(event)

                # Assert
                assert host.current_state() == to_state

    def test_vetoed_archive(self, target):
        """Test that the always-false archive callback halts the transition."""
        # Arrange
        target.trigger_event("close")

        # Act & Assert
        with pytest.raises(UserHaltError) as excinfo:
            target.trigger_event("archive")
        assert excinfo.value.event == "archive"
        assert excinfo.value.target_state == "archived"
        assert target.current_state() == "closed"

    def test_next_states_and_events(self, target):
        """Test the lookups from the current state."""
        # Assert
        assert sorted(target.next_states()) == ["closed", "kiv"]
        assert target.next_events() == ["close", "kiv"]
        assert target.all_states() == ["open", "closed", "kiv", "archived"]

    def test_terminal_state_has_no_next(self, target):
        """Test that a state without outgoing edges is not an error."""
        # Arrange
        target.state = "archived"

        # Assert
        assert target.next_states() == []
        assert target.next_events() == []


class TestTriggerEvent:
    """Tests for trigger_event."""

    def test_unknown_event_raises(self, target):
        # Act & Assert
        with pytest.raises(InvalidEventError) as excinfo:
            target.trigger_event("explode")
        assert excinfo.value.profile == "default"
        assert target.current_state() == "open"

    @pytest.mark.parametrize("event", [None, 42])
    def test_non_label_event_raises_invalid_event(self, target, event):
        """Test that an event that is not a label is reported as an unknown event."""
        # Act & Assert
        with pytest.raises(InvalidEventError) as excinfo:
            target.trigger_event(event)
        assert excinfo.value.event == repr(event)
        assert excinfo.value.profile == "default"
        assert target.current_state() == "open"
        assert target.can_trigger(event) is False

    def test_non_label_event_without_current_state_is_noop(self, target):
        # Arrange
        target.state = None

        # Act & Assert
        assert target.trigger_event(None) is None

    def test_missing_current_state_is_noop(self, target):
        """Test that an absent state makes trigger_event a silent no-op."""
        # Arrange
        target.state = None

        # Act
        result = target.trigger_event("explode")

        # Assert
        assert result is None
        assert target.state is None

    @pytest.mark.parametrize("returned", [True, None, "yes", 0, []])
    def test_only_false_vetoes(self, returned):
        """Test that any return value other than False proceeds."""
        # Arrange
        host = make_host(MagicMock(return_value=returned))

        # Act
        host.trigger_event("close")

        # Assert
        assert host.current_state() == "closed"

    def test_callback_phases_and_order(self):
        """Test before/write/after ordering and the callback arguments."""
        # Arrange
        seen = []

        def callback(info):
            seen.append((info.phase, info.host.state))

        host = make_host(callback)
        extra = MagicMock(side_effect=lambda info: seen.append(("extra", info.host.state)))

        # Act
        host.trigger_event("close", extra)

        # Assert
        assert seen == [
            (TransitionPhase.BEFORE, "open"),
            (TransitionPhase.AFTER, "closed"),
            ("extra", "closed"),
        ]
        info = extra.call_args[0][0]
        assert info.phase is TransitionPhase.AFTER
        assert (info.event, info.from_state, info.to_state) == ("close", "open", "closed")
        assert info.host is host
        assert info.profile == "default"

    def test_veto_skips_after_callbacks(self, caplog):
        """Test that a veto raises, logs and skips the after phase."""
        # Arrange
        callback = MagicMock(return_value=False)
        extra = MagicMock()
        host = make_host(callback)

        # Act
        with caplog.at_level(logging.ERROR):
            with pytest.raises(UserHaltError):
                host.trigger_event("close", extra)

        # Assert
        callback.assert_called_once()
        extra.assert_not_called()
        assert host.current_state() == "open"
        assert "callback returned False" in caplog.text

    def test_before_callback_exception_propagates(self):
        """Test that a raising before-callback leaves the state untouched."""
        # Arrange
        host = make_host(MagicMock(side_effect=RuntimeError("boom")))

        # Act & Assert
        with pytest.raises(RuntimeError, match="boom"):
            host.trigger_event("close")
        assert host.current_state() == "open"

    def test_extra_callback_without_registered_callback(self):
        """Test that the caller callback runs even without a registered one."""
        # Arrange
        host = make_host()
        extra = MagicMock(return_value=False)

        # Act
        host.trigger_event("close", extra)

        # Assert
        extra.assert_called_once()
        assert host.current_state() == "closed"

    def test_can_trigger(self, target):
        """Test the non-raising event check."""
        assert target.can_trigger("close")
        assert not target.can_trigger("reopen")
        assert not target.can_trigger("explode")


class TestApplyState:
    """Tests for apply_state and apply_state_strict."""

    def test_apply_reachable_state(self, target):
        # Act
        result = target.apply_state("closed")

        # Assert
        assert result is True
        assert target.state == "closed"
        assert "kiv" in target.next_states()

    def test_apply_unreachable_state(self, target):
        """Test that an unreachable state returns False and writes nothing."""
        # Act
        result = target.apply_state("notsure")

        # Assert
        assert result is False
        assert target.state == "open"

    @pytest.mark.parametrize("state", [None, 42, ["closed"]])
    def test_apply_non_label_state(self, target, state):
        """Test that a value that is not a label is never reachable."""
        # Act & Assert
        assert target.apply_state(state) is False
        assert target.state == "open"
        with pytest.raises(InvalidStateError) as excinfo:
            target.apply_state_strict(state)
        assert excinfo.value.state == repr(state)
        assert excinfo.value.current_state == "open"

    def test_strict_raises_exactly_when_apply_fails(self, target_cls):
        """Test that the strict variant agrees with apply_state."""
        for candidate in ["open", "closed", "kiv", "archived", "notsure"]:
            reference = target_cls()
            expected = reference.apply_state(candidate)

            host = target_cls()
            if expected:
                host.apply_state_strict(candidate)
                assert host.state == candidate
            else:
                with pytest.raises(InvalidStateError) as excinfo:
                    host.apply_state_strict(candidate)
                assert excinfo.value.current_state == "open"
                assert host.state == "open"

    def test_apply_state_without_current_state(self, target):
        """Test that nothing is reachable from an absent state."""
        # Arrange
        target.state = None

        # Act & Assert
        assert target.apply_state("open") is False
        assert target.state is None
