import random
from typing import List, Optional, Sequence

from ..errors import InvalidArgument

# Daily "self-love" pool
DAILY_POOL = [
    "Write down three things you like about yourself",
    "Take a 10-minute walk without your phone",
    "Drink a full glass of water right after waking up",
    "Say something kind to yourself in the mirror",
    "Go to bed 30 minutes earlier than usual",
    "Cook yourself a proper meal",
    "Stretch for five minutes before lunch",
    "Write a short thank-you note to your past self",
    "Spend 15 minutes on a hobby just for fun",
    "Unfollow one account that makes you feel bad",
    "Take a slow shower and play your favourite song",
    "Write down one thing you did well today",
    "Step outside and get some sunlight",
    "Put your phone away for the first hour of the day",
    "Tidy one small corner of your room",
]

# Weekly "general" pool
WEEKLY_POOL = [
    "Read one chapter of a book",
    "Call a friend or family member you haven't talked to in a while",
    "Try a recipe you have never made before",
    "Visit a place in your neighbourhood you have never been to",
    "Declutter one drawer or shelf",
    "Go for a run or a long bike ride",
    "Plan a small treat for yourself and do it",
    "Learn ten words in a new language",
    "Spend an afternoon completely offline",
    "Write a one-page journal entry about your week",
    "Watch a documentary on a topic you know nothing about",
    "Do a digital clean-up of your photos or files",
]


def pick_n(pool: Sequence[str], n: int, rng: Optional[random.Random] = None) -> List[str]:
    """
    Draw `n` distinct missions from `pool` in random order.

    Raises InvalidArgument when `n` is negative or larger than the pool; never clamps.
    """
    if n < 0 or n > len(pool):
        raise InvalidArgument(
            f"Cannot pick {n} missions from a pool of {len(pool)}",
            details={"n": n, "pool_size": len(pool)},
        )
    if rng is None:
        rng = random
    return rng.sample(list(pool), n)


def pick_one(pool: Sequence[str], rng: Optional[random.Random] = None) -> str:
    return pick_n(pool, 1, rng)[0]
