import pytest

from git_chord.chords import ArgPolicy, CommandSpec, MacroSpec, MacroStep, MultiCommandSpec


def test_no_argument_template_gets_trailing_placeholder() -> None:
    spec = CommandSpec("a", "git add .")

    assert spec.template == "git add . {}"
    assert spec.template.count("{}") == 1


def test_required_template_without_placeholder_is_rejected() -> None:
    with pytest.raises(ValueError):
        CommandSpec("n", "git checkout -b", ArgPolicy.REQUIRED)


def test_template_with_two_placeholders_is_rejected() -> None:
    with pytest.raises(ValueError):
        CommandSpec("z", "git {} {}", ArgPolicy.OPTIONAL)


def test_default_only_allowed_for_optional_commands() -> None:
    with pytest.raises(ValueError):
        CommandSpec("m", "git merge {}", ArgPolicy.REQUIRED, default="main")


def test_command_key_must_be_single_character() -> None:
    with pytest.raises(ValueError):
        CommandSpec("ab", "git status")


def test_quoted_placeholder_splits_into_single_token() -> None:
    spec = CommandSpec("c", 'git commit -m "{}"', ArgPolicy.REQUIRED)

    assert spec.argv_template == ("git", "commit", "-m", "{}")


def test_usage_marks_required_and_default_arguments() -> None:
    commit = CommandSpec("c", 'git commit -m "{}"', ArgPolicy.REQUIRED)
    checkout = CommandSpec("x", "git checkout {}", ArgPolicy.OPTIONAL, default="main")
    status = CommandSpec("s", "git status")

    assert commit.usage == "git commit -m <arg>"
    assert checkout.usage == "git checkout [main]"
    assert status.usage == "git status"


def test_multi_key_must_be_two_characters() -> None:
    with pytest.raises(ValueError):
        MultiCommandSpec("p", "git push --force")


def test_multi_command_cannot_take_placeholder() -> None:
    with pytest.raises(ValueError):
        MultiCommandSpec("pf", "git push {}")


def test_macro_parse_splits_key_and_argument_at_first_space() -> None:
    macro = MacroSpec.parse("X", "x {branch}:m topic branch:F")

    assert macro.steps == (
        MacroStep("x", "{branch}"),
        MacroStep("m", "topic branch"),
        MacroStep("F", ""),
    )
    assert macro.serialized == "x {branch}:m topic branch:F"


def test_macro_parse_skips_empty_parts() -> None:
    macro = MacroSpec.parse("W", "p::x")

    assert [step.key for step in macro.steps] == ["p", "x"]


def test_macro_parse_drops_argument_equal_to_key() -> None:
    macro = MacroSpec.parse("Y", "x x")

    assert macro.steps == (MacroStep("x", ""),)


def test_macro_requires_steps() -> None:
    with pytest.raises(ValueError):
        MacroSpec.parse("E", "")
