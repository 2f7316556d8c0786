import pytest

from bean_editor.keymaps import (
    DEFAULT_ACTIONS,
    DEFAULT_BINDINGS,
    ActionRef,
    Binding,
    KeyChord,
    KeymapConflictError,
    KeymapRegistry,
    load_default_keymaps,
)


def make_action(action_id: str = "core.test") -> ActionRef:
    return ActionRef(id=action_id, handler=lambda *args, **kwargs: None)


def make_binding(
    *,
    binding_id: str,
    token: str = "ctrl+k",
    action_id: str = "core.test",
    menu: bool = False,
) -> Binding:
    return Binding(
        id=binding_id,
        chord=KeyChord.parse(token),
        action_id=action_id,
        menu=menu,
    )


def test_register_binding_success() -> None:
    registry = KeymapRegistry()
    registry.register_action(make_action())
    binding = make_binding(binding_id="core.k")

    registry.register_binding(binding)

    assert registry.stats().binding_count == 1
    assert list(registry.iter_bindings()) == [binding]
    match = registry.resolve("ctrl+k")
    assert match is not None
    assert match.binding is binding
    assert match.action.id == "core.test"


def test_register_binding_conflict_detection() -> None:
    registry = KeymapRegistry()
    registry.register_action(make_action())
    registry.register_binding(make_binding(binding_id="core.k"))

    with pytest.raises(KeymapConflictError) as excinfo:
        registry.register_binding(make_binding(binding_id="core.k.duplicate"))

    assert excinfo.value.existing.id == "core.k"


def test_replace_claims_chord_from_existing_binding() -> None:
    registry = KeymapRegistry()
    registry.register_action(make_action())
    registry.register_action(make_action("core.other"))
    registry.register_binding(make_binding(binding_id="core.k"))

    registry.register_binding(
        make_binding(binding_id="core.k2", action_id="core.other"), replace=True
    )

    match = registry.resolve(KeyChord("k", ("ctrl",)))
    assert match is not None
    assert match.action.id == "core.other"
    assert registry.stats().binding_count == 1


def test_duplicate_ids_are_rejected() -> None:
    registry = KeymapRegistry()
    registry.register_action(make_action())

    with pytest.raises(ValueError):
        registry.register_action(make_action())

    registry.register_binding(make_binding(binding_id="core.k"))
    with pytest.raises(ValueError):
        registry.register_binding(make_binding(binding_id="core.k", token="ctrl+j"))


def test_binding_to_unknown_action_fails() -> None:
    registry = KeymapRegistry()

    with pytest.raises(KeyError):
        registry.register_binding(make_binding(binding_id="core.k"))


def test_unregister_binding_frees_chord() -> None:
    registry = KeymapRegistry()
    registry.register_action(make_action())
    registry.register_binding(make_binding(binding_id="core.k"))
    revision = registry.revision()

    registry.unregister_binding("core.k")

    assert registry.resolve("ctrl+k") is None
    assert registry.revision() == revision + 1
    with pytest.raises(KeyError):
        registry.get_binding("core.k")


def test_chord_tokens_are_normalized() -> None:
    assert KeyChord.parse("shift+ctrl+Z").token == "ctrl+shift+Z"
    assert KeyChord.parse("Enter").token == "enter"
    assert KeyChord.parse("}").token == "}"
    assert KeyChord.parse("ctrl++").key == "+"
    assert KeyChord.parse("+").token == "+"


def test_load_default_keymaps_installs_editor_chords() -> None:
    registry = load_default_keymaps(KeymapRegistry())

    stats = registry.stats()
    assert stats.action_count == len(DEFAULT_ACTIONS)
    assert stats.binding_count == len(DEFAULT_BINDINGS)

    for token, action_id in [
        ("enter", "edit.new_line"),
        ("}", "edit.type_close"),
        (")", "edit.type_close"),
        ("]", "edit.type_close"),
        ("ctrl+z", "history.undo"),
        ("ctrl+shift+z", "history.redo"),
        ("ctrl+y", "history.redo"),
        ("ctrl+s", "project.save"),
    ]:
        match = registry.resolve(token)
        assert match is not None, token
        assert match.action.id == action_id


def test_menu_bindings_cover_project_actions() -> None:
    registry = load_default_keymaps(KeymapRegistry())

    menu = {binding.action_id for binding in registry.menu_bindings()}

    assert menu == {
        "project.toggle_errors",
        "project.run",
        "project.compile",
        "project.save",
    }


def test_load_default_keymaps_filters_and_overrides() -> None:
    registry = load_default_keymaps(
        KeymapRegistry(),
        include_actions={"edit.new_line", "history.undo"},
        overrides=(
            Binding(
                id="custom.undo",
                chord=KeyChord.parse("ctrl+u"),
                action_id="history.undo",
            ),
        ),
    )

    assert registry.stats().action_count == 2
    assert registry.resolve("enter") is not None
    assert registry.resolve("ctrl+u") is not None
    assert registry.resolve("ctrl+s") is None
