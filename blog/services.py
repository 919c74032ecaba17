"""Post write path: image replacement, scalar persistence and tag sync."""
from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import FrozenSet, Iterable, Optional, Set, Tuple

from django.conf import settings
from django.core.files.storage import default_storage
from django.core.files.uploadedfile import UploadedFile
from django.db import transaction
from django.utils.text import get_valid_filename

from .models import Category, Post

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class PostInput:
    title: str
    slug: str
    content: str
    category: Category
    tags: FrozenSet[int]
    image: Optional[UploadedFile] = None

    @classmethod
    def from_form(cls, form) -> "PostInput":
        data = form.cleaned_data
        image = data.get("image")
        if not isinstance(image, UploadedFile):
            image = None
        return cls(
            title=data["title"],
            slug=data["slug"],
            content=data["content"],
            category=data["category"],
            tags=frozenset(tag.pk for tag in data.get("tags") or ()),
            image=image,
        )


def image_namespace() -> str:
    return getattr(settings, "BLOG_IMAGE_NAMESPACE", "blog")


def store_image(upload: UploadedFile) -> str:
    """Write ``upload`` into the image namespace and return its storage name."""
    name = f"{image_namespace()}/{get_valid_filename(upload.name)}"
    return default_storage.save(name, upload)


def discard_image(name: str) -> None:
    """Remove a stored image; failures are logged, never raised."""
    if not name:
        return
    try:
        default_storage.delete(name)
    except Exception:
        logger.exception("Could not delete stored image %s", name)


def sync_tags(post: Post, tag_ids: Iterable[int]) -> Tuple[Set[int], Set[int]]:
    """Make ``post``'s tags exactly ``tag_ids``; return ``(added, removed)``."""
    target = set(tag_ids)
    current = set(post.tags.values_list("pk", flat=True))
    to_add = target - current
    to_remove = current - target
    if to_remove:
        post.tags.remove(*to_remove)
    if to_add:
        post.tags.add(*to_add)
    return to_add, to_remove


def save_post(post: Post, data: PostInput) -> Post:
    """Create or update ``post`` from validated input.

    A new image is written to storage before anything touches the database,
    so a storage failure leaves the post as it was. The previous image is
    only removed once the row and its tags are committed.
    """
    created = post.pk is None
    previous_image = post.image.name if post.image else ""
    new_image = store_image(data.image) if data.image is not None else ""

    try:
        with transaction.atomic():
            post.title = data.title
            post.slug = data.slug
            post.content = data.content
            post.category = data.category
            if new_image:
                post.image = new_image
            post.save()
            added, removed = sync_tags(post, data.tags)
    except Exception:
        if new_image:
            discard_image(new_image)
        post.image = previous_image
        if created:
            post.pk = None
        raise

    logger.info(
        "%s post %s (%s): tags +%s -%s",
        "Created" if created else "Updated",
        post.pk,
        post.slug,
        sorted(added),
        sorted(removed),
    )
    if new_image and previous_image and previous_image != new_image:
        logger.info("Replaced image %s with %s on post %s", previous_image, new_image, post.pk)
        discard_image(previous_image)
    return post
