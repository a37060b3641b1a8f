from __future__ import annotations

import pytest

from menutree import (
    ActionBody,
    BuilderError,
    ConfigurationError,
    InteractionBuilder,
    Menu,
    Node,
    PromptTable,
)


def _noop(*_):
    return None


def test_builder_produces_configured_menu_node():
    root = (
        InteractionBuilder.create()
        .with_intro("first")
        .with_intro("second")
        .prompt_for_input("a", "A?")
        .prompt_for_input("b", "B?")
        .prompt_for_input("a", "A again?")
        .with_menu(
            lambda menu: menu.option("same", lambda o: o.run_action(_noop).and_exit()).option(
                "same", lambda o: o.run_action(_noop).and_go_back()
            )
        )
        .build()
    )

    assert root.intro == "second"
    assert list(root.input_prompts.items()) == [("a", "A again?"), ("b", "B?")]
    assert isinstance(root.body, Menu)
    assert [opt.label for opt in root.body.options] == ["same", "same"]
    first, second = (opt.node for opt in root.body.options)
    assert isinstance(first.body, ActionBody) and first.exit_after_action is True
    assert second.exit_after_action is False


def test_node_configuration_is_read_only():
    node = InteractionBuilder.create().prompt_for_input("a", "A?").run_action(_noop).and_exit()
    with pytest.raises(TypeError):
        node.input_prompts["b"] = "B?"  # type: ignore[index]
    with pytest.raises(AttributeError):
        node.intro = "changed"  # type: ignore[misc]


def test_prompt_table_keys_follow_case_policy():
    node = (
        InteractionBuilder.create()
        .prompt_case_insensitive(
            "pick",
            ("Alpha", lambda c: c.run_action(_noop).and_exit()),
            ("beta", lambda c: c.run_action(_noop).and_exit()),
        )
        .build()
    )
    table = node.body
    assert isinstance(table, PromptTable)
    assert table.labels == ("Alpha", "beta")
    assert table.lookup("ALPHA") is table.lookup("alpha") is not None
    assert table.lookup("gamma") is None


def test_case_insensitive_duplicates_are_rejected():
    with pytest.raises(BuilderError):
        InteractionBuilder.create().prompt_case_insensitive(
            None,
            ("yes", lambda c: c.run_action(_noop).and_exit()),
            ("YES", lambda c: c.run_action(_noop).and_exit()),
        )


def test_case_sensitive_keys_may_differ_only_by_case():
    node = (
        InteractionBuilder.create()
        .prompt(
            None,
            ("yes", lambda c: c.run_action(_noop).and_exit()),
            ("YES", lambda c: c.run_action(_noop).and_go_back()),
        )
        .build()
    )
    assert node.body.lookup("yes") is not node.body.lookup("YES")


def test_stages_are_sealed_after_build():
    base = InteractionBuilder.create()
    base.run_action(_noop).and_exit()
    with pytest.raises(BuilderError):
        base.with_intro("late")
    with pytest.raises(BuilderError):
        base.build()


def test_action_requires_a_continuation_choice():
    base = InteractionBuilder.create()
    base.run_action(_noop)
    with pytest.raises(BuilderError):
        base.build()


def test_action_cannot_follow_a_menu():
    finisher = InteractionBuilder.create().with_menu(
        lambda menu: menu.option("x", lambda o: o.run_action(_noop).and_exit())
    )
    with pytest.raises(BuilderError):
        finisher.run_action(_noop)


def test_child_must_return_its_own_node():
    stray = InteractionBuilder.create().run_action(_noop).and_exit()
    with pytest.raises(BuilderError):
        InteractionBuilder.create().with_menu(lambda menu: menu.option("reuse", lambda _child: stray))


def test_menu_handle_is_unusable_after_with_menu():
    captured = []
    InteractionBuilder.create().with_menu(
        lambda menu: captured.append(menu) or menu.option("x", lambda o: o.run_action(_noop).and_exit())
    ).build()
    with pytest.raises(BuilderError):
        captured[0].option("late", lambda o: o.run_action(_noop).and_exit())


def test_parent_cannot_be_reconfigured_from_inside_a_child():
    base = InteractionBuilder.create()
    with pytest.raises(BuilderError):
        base.with_menu(lambda menu: menu.option("x", lambda o: base.with_intro("sneaky") and o.build()))


def test_bodyless_node_builds_by_default(monkeypatch):
    monkeypatch.delenv("MENUTREE_EAGER_VALIDATION", raising=False)
    node = InteractionBuilder.create().with_intro("empty").build()
    assert isinstance(node, Node)
    assert node.body is None
    assert node.kind == "unconfigured"


def test_eager_validation_rejects_bodyless_node():
    with pytest.raises(ConfigurationError):
        InteractionBuilder.create(eager_validation=True).with_intro("empty").build()
    node = InteractionBuilder.create(eager_validation=True).run_action(_noop).and_exit()
    assert node.kind == "action"


def test_eager_validation_applies_to_children():
    with pytest.raises(ConfigurationError):
        InteractionBuilder.create(eager_validation=True).with_menu(
            lambda menu: menu.option("broken", lambda o: o.with_intro("nothing").build())
        )


def test_eager_validation_default_comes_from_environment(monkeypatch):
    monkeypatch.setenv("MENUTREE_EAGER_VALIDATION", "yes")
    with pytest.raises(ConfigurationError):
        InteractionBuilder.create().build()
    # an explicit argument wins over the environment
    node = InteractionBuilder.create(eager_validation=False).build()
    assert node.kind == "unconfigured"
