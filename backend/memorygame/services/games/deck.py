import random
from typing import List, Sequence

from memorygame.errors import ValidationError
from memorygame.models import Card


def standard_pool(count: int, pattern: str = '/images/bild{}.jpg') -> List[str]:
    """Reference paths of the numbered standard images, 1-based."""
    return [pattern.format(i) for i in range(1, count + 1)]


def unique_images(images) -> List[str]:
    return list(dict.fromkeys(images or []))


def available_image_count(pool: Sequence[str], custom_images) -> int:
    custom = unique_images(custom_images)
    return len(custom) + len(set(pool) - set(custom))


def select_images(pool: Sequence[str], custom_images, needed: int, rng=None) -> List[str]:
    """Pick `needed` distinct images, preferring the custom ones.

    With enough custom images a random sample of them is used. Otherwise all
    custom images are kept and the remainder is sampled from the standard
    pool, skipping any pool entry that is already among the custom images.
    The pool passed in is never modified.
    """
    rng = rng or random
    custom = unique_images(custom_images)
    if len(custom) >= needed:
        return rng.sample(custom, needed)

    taken = set(custom)
    candidates = [img for img in pool if img not in taken]
    missing = needed - len(custom)
    if missing > len(candidates):
        raise ValidationError(f'Not enough images for {needed} pairs.')
    return custom + rng.sample(candidates, missing)


def build_deck(images: Sequence[str], rng=None) -> List[Card]:
    """Two cards per image, shuffled uniformly, ids numbered by position."""
    rng = rng or random
    faces = list(images) * 2
    rng.shuffle(faces)
    return [Card(id=i, image=img) for i, img in enumerate(faces)]
