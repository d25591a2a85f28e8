"""Tests for chat and session state entities."""

from niklaus.core.entities import (
    ChatState,
    EntitySelection,
    SessionState,
    SupportChat,
    TurnRole,
    View,
)


class TestSupportChat:
    """Tests for SupportChat."""

    def test_initial_state(self):
        chat = SupportChat()
        assert chat.turns == ()
        assert chat.state == ChatState.IDLE
        assert not chat.is_awaiting

    def test_append_assigns_positions(self):
        chat = SupportChat().append(TurnRole.USER, "Oi").append(TurnRole.ASSISTANT, "Olá")
        assert [t.position for t in chat.turns] == [0, 1]
        assert [t.role for t in chat.turns] == [TurnRole.USER, TurnRole.ASSISTANT]

    def test_append_returns_new_value(self):
        chat = SupportChat()
        updated = chat.append(TurnRole.USER, "Oi")
        assert chat.turns == ()
        assert len(updated.turns) == 1

    def test_with_state(self):
        chat = SupportChat().with_state(ChatState.AWAITING_RESPONSE)
        assert chat.is_awaiting


class TestEntitySelection:
    """Tests for EntitySelection."""

    def test_nothing_selected_needs_selection(self):
        selection = EntitySelection()
        assert selection.needs_selection
        assert selection.selected_id is None

    def test_selected_and_closed(self, entity_a):
        selection = EntitySelection(selected=entity_a)
        assert not selection.needs_selection
        assert selection.selected_id == "A"

    def test_chooser_open_keeps_selection(self, entity_a):
        """Forced-open chooser is distinct from an empty selection."""
        selection = EntitySelection(selected=entity_a, chooser_open=True)
        assert selection.needs_selection
        assert selection.selected_id == "A"


class TestSessionState:
    """Tests for SessionState."""

    def test_signed_out_default(self):
        state = SessionState()
        assert not state.is_authenticated
        assert state.view == View.CATALOG
        assert state.cart.is_empty
        assert not state.submitting

    def test_authenticated(self, rep_profile):
        assert SessionState(profile=rep_profile).is_authenticated
