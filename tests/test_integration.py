"""Integration tests: sections wired into a store."""

from reducerless import ABSENT
from reducerless import create_store_section
from reducerless.utils import deep_clone


class TestStoreIntegration:
    """Sections dispatched through a combined reducer."""

    def test_update_actions(self, section1_defaults, make_store):
        """Test update actions trace changes and delete ABSENT keys."""
        section = create_store_section("section1", section1_defaults)
        store = make_store(section.reducer)

        old_state = section.select(store.get_state())
        snapshot = deep_clone(old_state)
        store.dispatch(section.update({"a1": ABSENT, "a2": {"a21": 666}}))
        new_state = section.select(store.get_state())

        # The previous state was not modified
        assert old_state == snapshot

        # a1 was explicitly removed
        assert "a1" not in new_state

        # a2 is the parent of a changed field
        assert new_state["a2"] is not old_state["a2"]
        assert new_state["a2"]["a21"] == 666

        # Fields outside the payload keep their references
        assert new_state["a2"]["a22"] is old_state["a2"]["a22"]
        assert new_state["a3"] == old_state["a3"]
        assert new_state["a3"] is old_state["a3"]

    def test_replace_actions(self, section1_defaults, make_store):
        """Test replace actions reset ABSENT keys and overwrite the rest."""
        section = create_store_section("section1", section1_defaults)
        store = make_store(section.reducer)

        old_state = section.select(store.get_state())
        snapshot = deep_clone(old_state)
        store.dispatch(section.replace({"a1": ABSENT, "a2": {"a21": 666}}))
        new_state = section.select(store.get_state())

        assert old_state == snapshot

        # a1 was restored from the defaults
        assert new_state["a1"] == section1_defaults["a1"]

        # a2 was replaced as a whole
        assert new_state["a2"] is not old_state["a2"]
        assert new_state["a2"] == {"a21": 666}
        assert "a22" not in new_state["a2"]

        # Top-level fields outside the payload are not affected
        assert new_state["a3"] is old_state["a3"]

    def test_reset_nested_section_to_defaults(self, section1_defaults, make_store):
        """Test an update followed by a replace restores the default subtree."""
        section = create_store_section("section1", section1_defaults)
        store = make_store(section.reducer)

        store.dispatch(section.update({"a2": {"a22": {"a221": 0}}}, "tweak"))
        assert section.select(store.get_state())["a2"]["a22"]["a221"] == 0

        store.dispatch(section.replace({"a2": ABSENT}, "reset"))
        assert section.select(store.get_state())["a2"] is section1_defaults["a2"]

    def test_sections_are_independent(self, make_store):
        """Test actions only reach the section they were created for."""
        prefs = create_store_section("prefs", {"theme": "light"})
        session = create_store_section("session", {"user": None, "tabs": []})
        store = make_store(prefs.reducer, session.reducer)

        session_before = session.select(store.get_state())
        store.dispatch(prefs.update({"theme": "dark"}))

        assert prefs.select(store.get_state()) == {"theme": "dark"}
        assert session.select(store.get_state()) is session_before

        store.dispatch(session.replace({"user": "ada", "tabs": ["home"]}, "login"))
        assert session.select(store.get_state()) == {"user": "ada", "tabs": ["home"]}
        assert prefs.select(store.get_state()) == {"theme": "dark"}
