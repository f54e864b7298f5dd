"""Image selection for attachment previews."""

import random
from collections.abc import Callable, Sequence

from flickr_unfurl.domain.photos import ImageVariant
from flickr_unfurl.errors import NoSuitableImageError

# Bounds imposed by Slack's message attachment layout
MAX_WIDTH = 400
MAX_HEIGHT = 500
IDEAL_ASPECT_RATIO = MAX_WIDTH / MAX_HEIGHT

Sampler = Callable[[Sequence[ImageVariant]], ImageVariant]


def find_best_image(
    variants: Sequence[ImageVariant], sample: Sampler = random.choice
) -> ImageVariant:
    """Pick the smallest variant that still overflows the attachment box.

    Every variant of a photo shares roughly one aspect ratio, so a single sampled
    variant decides whether width or height is the binding dimension. Raises
    ``NoSuitableImageError`` when nothing exceeds the bound.
    """
    if not variants:
        raise NoSuitableImageError("photo has no image variants")
    any_variant = sample(variants)
    aspect_ratio = any_variant.width / any_variant.height
    if IDEAL_ASPECT_RATIO > aspect_ratio:
        dimension, bound = "width", MAX_WIDTH
    else:
        dimension, bound = "height", MAX_HEIGHT
    for variant in sorted(variants, key=lambda item: getattr(item, dimension)):
        if getattr(variant, dimension) > bound:
            return variant
    raise NoSuitableImageError(f"no image variant exceeds {dimension} {bound}")
