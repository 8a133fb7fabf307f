"""Random sentence generator driven by a small built-in grammar."""

from __future__ import annotations

import random
import string
import sys
from typing import Optional, Sequence, TextIO

DEFAULT_SEED = 4951
DEFAULT_COUNT = 4

Rule = tuple[tuple[str, ...], ...]


def _rule(words: Sequence[str], loc: Sequence[int]) -> Rule:
    """Split WORDS into alternatives; LOC is a count followed by boundaries."""
    count, *bounds = loc
    pairs = list(zip(bounds, bounds[1:]))[:count]
    if len(pairs) != count:
        raise ValueError("grammar rule has too few boundaries")
    return tuple(tuple(words[a:b]) for a, b in pairs)


# Each rule is a list of words and a count-prefixed list of boundaries.
# A word made of digits names another rule to expand in its place.
_RAW_GRAMMAR: tuple[tuple[Sequence[str], Sequence[int]], ...] = (
    # 0: start
    (
        ["You", "1", "5", ".", "May", "13", ".", "With", "the", "19", "of",
         "18", ",", "may", "13", "."],
        [3, 0, 4, 7, 16],
    ),
    # 1: adj
    (["3", "4", "2", ",", "1"], [3, 0, 1, 2, 5]),
    # 2: adj3
    (["3", "4"], [2, 0, 1, 2]),
    # 3: adj1
    (
        ["lame", "dried", "up", "par-broiled", "bloated", "half-baked",
         "spiteful", "egotistical", "ungrateful", "stupid", "moronic", "fat",
         "ugly", "puny", "pitiful", "insignificant", "blithering", "repulsive",
         "worthless", "blundering", "retarded", "useless", "obnoxious",
         "low-budget", "assinine", "neurotic", "subhuman", "crochety",
         "indescribable", "contemptible", "unspeakable", "sick", "lazy",
         "good-for-nothing", "slutty", "mentally-deficient", "creepy",
         "sloppy", "dismal", "pompous", "pathetic", "friendless", "revolting",
         "slovenly", "cantankerous", "uncultured", "insufferable", "gross",
         "unkempt", "defective", "crumby"],
        [50, 0, 1, 3, 4, 5, 6, 7, 8, 9, 10, 11, 12, 13, 14, 15, 16, 17, 18,
         19, 20, 21, 22, 23, 24, 25, 26, 27, 28, 29, 30, 31, 32, 33, 34, 35,
         36, 37, 38, 39, 40, 41, 42, 43, 44, 45, 46, 47, 48, 49, 50, 51],
    ),
    # 4: adj2
    (
        ["putrefied", "festering", "funky", "moldy", "leprous", "curdled",
         "fetid", "slimy", "crusty", "sweaty", "damp", "deranged", "smelly",
         "stenchy", "malignant", "noxious", "grimy", "reeky", "nasty",
         "mutilated", "sloppy", "gruesome", "grisly", "sloshy", "wormy",
         "mealy", "spoiled", "contaminated", "rancid", "musty", "fly-covered",
         "moth-eaten", "decaying", "decomposed", "freeze-dried", "defective",
         "petrified", "rotting", "scabrous", "hirsute"],
        [40, 0, 1, 2, 3, 4, 5, 6, 7, 8, 9, 10, 11, 12, 13, 14, 15, 16, 17, 18,
         19, 20, 21, 22, 23, 24, 25, 26, 27, 28, 29, 30, 31, 32, 33, 34, 35,
         36, 37, 38, 39, 40],
    ),
    # 5: name
    (
        ["10", ",", "bad", "excuse", "for", "6", ",", "6", "for", "brains",
         ",", "4", "11", "8", "for", "brains", "offspring", "of", "a",
         "motherless", "10", "7", "6", "7", "4", "11", "8"],
        [7, 0, 1, 6, 10, 16, 21, 23, 27],
    ),
    # 6: stuff
    (
        ["shit", "toe", "jam", "filth", "puss", "earwax", "leaf", "clippings",
         "bat", "guano", "mucus", "fungus", "mung", "refuse", "earwax",
         "spittoon", "spittle", "phlegm"],
        [14, 0, 1, 3, 4, 5, 6, 8, 10, 11, 12, 13, 14, 15, 17, 18],
    ),
    # 7: noun_and_prep
    (
        ["bit", "of", "piece", "of", "vat", "of", "lump", "of", "crock", "of",
         "ball", "of", "tub", "of", "load", "of", "bucket", "of", "mound",
         "of", "glob", "of", "bag", "of", "heap", "of", "mountain", "of",
         "load", "of", "barrel", "of", "sack", "of", "blob", "of", "pile",
         "of", "truckload", "of", "vat", "of"],
        [21, 0, 2, 4, 6, 8, 10, 12, 14, 16, 18, 20, 22, 24, 26, 28, 30, 32,
         34, 36, 38, 40, 42],
    ),
    # 8: organics
    (
        ["droppings", "mung", "zits", "puckies", "tumors", "cysts", "tumors",
         "livers", "froth", "parts", "scabs", "guts", "entrails", "blubber",
         "carcuses", "gizards", "9"],
        [17, 0, 1, 2, 3, 4, 5, 6, 7, 8, 9, 10, 11, 12, 13, 14, 15, 16, 17],
    ),
    # 9: body_parts
    (
        ["kidneys", "genitals", "buttocks", "earlobes", "innards", "feet"],
        [6, 0, 1, 2, 3, 4, 5, 6],
    ),
    # 10: noun
    (
        ["pop", "tart", "warthog", "twinkie", "barnacle", "fondue", "pot",
         "cretin", "fuckwad", "moron", "ass", "neanderthal", "nincompoop",
         "simpleton", "11"],
        [13, 0, 2, 3, 4, 5, 7, 8, 9, 10, 11, 12, 13, 14, 15],
    ),
    # 11: animal
    (
        ["donkey", "llama", "dingo", "lizard", "gekko", "lemur", "moose",
         "camel", "goat", "eel"],
        [10, 0, 1, 2, 3, 4, 5, 6, 7, 8, 9, 10],
    ),
    # 12: good_verb
    (
        ["love", "cuddle", "fondle", "adore", "smooch", "hug", "caress",
         "worship", "look", "at", "touch"],
        [10, 0, 1, 2, 3, 4, 5, 6, 7, 8, 10, 11],
    ),
    # 13: curse
    (
        ["14", "20", "23", "14", "17", "20", "23", "14", "find", "your", "9",
         "suddenly", "delectable", "14", "and", "14", "seek", "a",
         "battleground", "23"],
        [4, 0, 3, 7, 13, 20],
    ),
    # 14: afflictors
    (
        ["15", "21", "15", "21", "15", "21", "15", "21", "a", "22", "Rush",
         "Limbaugh", "the", "hosts", "of", "Hades"],
        [6, 0, 2, 4, 6, 8, 12, 16],
    ),
    # 15: quantity
    (
        ["a", "4", "hoard", "of", "a", "4", "pack", "of", "a", "truckload",
         "of", "a", "swarm", "of", "many", "an", "army", "of", "a", "4",
         "heard", "of", "a", "4", "platoon", "of", "a", "4", "and", "4",
         "group", "of", "16"],
        [10, 0, 4, 8, 11, 14, 15, 18, 22, 26, 32, 33],
    ),
    # 16: numbers
    (
        ["a", "thousand", "three", "million", "ninty-nine", "nine-hundred,",
         "ninty-nine", "forty-two", "a", "gazillion", "sixty-eight", "times",
         "thirty-three"],
        [7, 0, 2, 4, 5, 7, 8, 10, 13],
    ),
    # 17: adv
    (
        ["viciously", "manicly", "merrily", "happily", ",", "with", "the",
         "19", "of", "18", ",", "gleefully", ",", "with", "much",
         "ritualistic", "celebration", ",", "franticly"],
        [8, 0, 1, 2, 3, 4, 11, 12, 18, 19],
    ),
    # 18: metaphor
    (
        ["an", "irate", "manticore", "Thor's", "belch", "Alah's", "fist",
         "16", "titans", "a", "particularly", "vicious", "she-bear", "in",
         "the", "midst", "of", "her", "menstrual", "cycle", "a", "pissed-off",
         "Jabberwock"],
        [6, 0, 3, 5, 7, 9, 20, 23],
    ),
    # 19: force
    (["force", "fury", "power", "rage"], [4, 0, 1, 2, 3, 4]),
    # 20: bad_action
    (
        ["spit", "shimmy", "slobber", "find", "refuge", "find", "shelter",
         "dance", "retch", "vomit", "defecate", "erect", "a", "strip", "mall",
         "build", "a", "26", "have", "a", "religious", "experience",
         "discharge", "bodily", "waste", "fart", "dance", "drool", "lambada",
         "spill", "16", "rusty", "tacks", "bite", "you", "sneeze", "sing",
         "16", "campfire", "songs", "smite", "you", "16", "times",
         "construct", "a", "new", "home", "throw", "a", "party", "procreate"],
        [25, 0, 1, 2, 3, 5, 7, 8, 9, 10, 11, 15, 18, 22, 25, 26, 27, 28, 29,
         33, 35, 36, 40, 44, 48, 51, 52],
    ),
    # 21: beasties
    (
        ["yaks", "22", "maggots", "22", "cockroaches", "stinging", "scorpions",
         "fleas", "22", "weasels", "22", "gnats", "South", "American",
         "killer", "bees", "spiders", "4", "monkeys", "22", "wiener-dogs",
         "22", "rats", "22", "wolverines", "4", ",", "22", "pit-fiends"],
        [14, 0, 1, 3, 5, 7, 8, 10, 12, 16, 17, 19, 21, 23, 25, 29],
    ),
    # 22: condition
    (
        ["frothing", "manic", "crazed", "plague-ridden", "disease-carrying",
         "biting", "rabid", "blood-thirsty", "ravaging", "slavering"],
        [10, 0, 1, 2, 3, 4, 5, 6, 7, 8, 9, 10],
    ),
    # 23: place
    (
        ["in", "24", "25", "upon", "your", "mother's", "grave", "on", "24",
         "best", "rug", "in", "the", "26", "you", "call", "home", "upon",
         "your", "heinie"],
        [5, 0, 3, 7, 11, 17, 20],
    ),
    # 24: relation
    (
        ["your", "your", "your", "your", "father's", "your", "mother's",
         "your", "grandma's"],
        [6, 0, 1, 2, 3, 5, 7, 9],
    ),
    # 25: in_something
    (
        ["entrails", "anal", "cavity", "shoes", "house", "pantry", "general",
         "direction", "pants", "bed"],
        [8, 0, 1, 3, 4, 5, 6, 8, 9, 10],
    ),
    # 26: bad_place
    (
        ["rat", "hole", "sewer", "toxic", "dump", "oil", "refinery",
         "landfill", "porto-pottie"],
        [6, 0, 2, 3, 5, 7, 8, 9],
    ),
)

GRAMMAR: tuple[Rule, ...] = tuple(_rule(w, loc) for w, loc in _RAW_GRAMMAR)

_USAGE = (
    "\n"
    "Usage: insult [OPTION]...\n"
    "Prints random insults to screen.\n\n"
    "  -h:               this help message\n"
    "  -s <integer>:     set the random seed (default 4951)\n"
    "  -n <integer>:     choose number of insults (default 4)\n"
    "  -f <file>:        redirect output to <file>\n"
)


def expand(symbol: int, rng: random.Random) -> str:
    """Expand grammar rule SYMBOL into text, choosing alternatives with RNG.

    Words other than punctuation are preceded by a space.
    """
    if not 0 <= symbol < len(GRAMMAR):
        raise ValueError(f"no grammar rule {symbol}")
    alternatives = GRAMMAR[symbol]
    choice = alternatives[rng.randrange(len(alternatives))]
    parts = []
    for word in choice:
        if word[0].isdigit():
            parts.append(expand(int(word), rng))
        elif word[0] in string.punctuation:
            parts.append(word)
        else:
            parts.append(" " + word)
    return "".join(parts)


def generate(seed: int = DEFAULT_SEED, count: int = DEFAULT_COUNT) -> str:
    """Return COUNT sentences generated from SEED, in the program's layout."""
    rng = random.Random(seed)
    return "\n" + "".join(f"\n{expand(0, rng)}\n\n" for _ in range(count))


def _atoi(text: str) -> int:
    text = text.lstrip()
    sign = 1
    if text[:1] in ("+", "-"):
        sign = -1 if text[0] == "-" else 1
        text = text[1:]
    digits = ""
    for ch in text:
        if not ch.isdigit():
            break
        digits += ch
    return sign * int(digits) if digits else 0


def _usage(code: int, message: Optional[str] = None) -> None:
    if message is not None:
        sys.stdout.write(message)
    sys.stdout.write(_USAGE)
    raise SystemExit(code)


def main(argv: Optional[Sequence[str]] = None) -> int:
    """Command-line entry point; returns the exit status."""
    args = list(sys.argv[1:] if argv is None else argv)
    seed = DEFAULT_SEED
    count = DEFAULT_COUNT
    path: Optional[str] = None
    seed_given = count_given = False

    it = iter(args)
    for arg in it:
        # Help is recognized only as the first argument.
        if args[0] == "-h":
            _usage(0)
        elif arg == "-s":
            if seed_given:
                _usage(-1, "Can't have more than one seed")
            seed_given = True
            value = next(it, None)
            if value is None:
                _usage(-1, "Missing value for -s")
            seed = _atoi(value)
        elif arg == "-n":
            if count_given:
                _usage(-1, "Can't have more than one sentence option")
            count_given = True
            value = next(it, None)
            if value is None:
                _usage(-1, "Missing value for -n")
            count = _atoi(value)
            if count < 1:
                _usage(-1, "Must have at least one sentence")
        elif arg == "-f":
            if path is not None:
                _usage(-1, "Can't have more than one output file")
            value = next(it, None)
            if value is None:
                _usage(-1, "Missing value for -f")
            path = value
        else:
            _usage(-1, "Unrecognized flag")

    text = generate(seed, count)
    if path is None:
        sys.stdout.write(text)
        return 0
    try:
        out: TextIO = open(path, "w", encoding="utf-8")
    except OSError:
        sys.stdout.write(f"{path}: open failed\n")
        return 1
    with out:
        out.write(text)
    return 0