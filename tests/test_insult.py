import random

import pytest

from sectorfs.insult import GRAMMAR, expand, generate, main


def test_every_rule_expands_to_words():
    assert len(GRAMMAR) == 27
    for rule in range(len(GRAMMAR)):
        text = expand(rule, random.Random(rule))
        assert text.strip()
        assert not any(ch.isdigit() for ch in text)


def test_force_rule_expands_to_its_alternatives():
    assert GRAMMAR[19] == (("force",), ("fury",), ("power",), ("rage",))
    words = {"force", "fury", "power", "rage"}
    for seed in range(20):
        assert expand(19, random.Random(seed)) == " " + expand(
            19, random.Random(seed)
        ).lstrip()
        assert expand(19, random.Random(seed)).lstrip() in words


@pytest.mark.parametrize("seed", [0, 1, 7, 4951, 12345])
def test_expand_start_is_a_sentence(seed):
    text = expand(0, random.Random(seed))
    assert text.startswith((" You", " May", " With"))
    assert text.endswith(".")
    assert not any(ch.isdigit() for ch in text)


def test_expand_terminal_rule_gives_one_of_its_words():
    words = {alt[0] for alt in GRAMMAR[11]}
    for seed in range(20):
        assert expand(11, random.Random(seed)).lstrip() in words


def test_expand_rejects_unknown_rule():
    with pytest.raises(ValueError):
        expand(27, random.Random(0))


def test_generate_is_deterministic():
    first = generate(4951, 4)
    assert first == generate(4951, 4)
    assert len([s for s in first.split("\n") if s]) == 4


def test_generate_layout():
    text = generate(3, 5)
    assert text.startswith("\n\n")
    assert text.endswith(".\n\n")
    sentences = [s for s in text.split("\n") if s]
    assert len(sentences) == 5


def test_generate_longer_run_extends_shorter():
    assert generate(9, 3).startswith(generate(9, 2))


def test_main_writes_default(capsys):
    assert main([]) == 0
    assert capsys.readouterr().out == generate()


def test_main_seed_and_count(capsys):
    assert main(["-s", "17", "-n", "2"]) == 0
    assert capsys.readouterr().out == generate(17, 2)


def test_main_to_file(tmp_path, capsys):
    target = tmp_path / "out.txt"
    assert main(["-f", str(target), "-n", "1"]) == 0
    assert target.read_text(encoding="utf-8") == generate(4951, 1)
    assert capsys.readouterr().out == ""


def test_main_help_exits_zero(capsys):
    with pytest.raises(SystemExit) as info:
        main(["-h"])
    assert info.value.code == 0
    assert "Usage: insult" in capsys.readouterr().out


def test_help_not_first_is_unrecognized(capsys):
    with pytest.raises(SystemExit) as info:
        main(["-n", "2", "-h"])
    assert info.value.code == -1
    assert capsys.readouterr().out.startswith("Unrecognized flag")


@pytest.mark.parametrize(
    "argv, message",
    [
        (["-n", "0"], "Must have at least one sentence"),
        (["-s"], "Missing value for -s"),
        (["-s", "1", "-s", "2"], "Can't have more than one seed"),
        (["-n", "1", "-n", "2"], "Can't have more than one sentence option"),
        (["-x"], "Unrecognized flag"),
    ],
)
def test_main_errors(argv, message, capsys):
    with pytest.raises(SystemExit) as info:
        main(argv)
    assert info.value.code == -1
    assert capsys.readouterr().out.startswith(message)