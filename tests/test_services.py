import logging

import pytest
from django.core.files.storage import FileSystemStorage, default_storage

from blog import services
from blog.models import Post
from blog.services import PostInput, save_post, sync_tags


def _input(category, tag_ids, image=None, **overrides):
    fields = {"title": "My post", "slug": "my-post", "content": "Body"}
    fields.update(overrides)
    return PostInput(category=category, tags=frozenset(tag_ids), image=image, **fields)


@pytest.mark.django_db
def test_create_sets_exactly_the_submitted_tags(category, tags):
    post = save_post(Post(), _input(category, [tags[2].pk, tags[0].pk]))

    post.refresh_from_db()
    assert post.pk is not None
    assert set(post.tags.values_list("pk", flat=True)) == {tags[0].pk, tags[2].pk}


@pytest.mark.django_db
def test_sync_tags_adds_and_removes(post, tags):
    added, removed = sync_tags(post, [tags[1].pk, tags[2].pk])

    assert added == {tags[2].pk}
    assert removed == {tags[0].pk}
    assert set(post.tags.values_list("pk", flat=True)) == {tags[1].pk, tags[2].pk}


@pytest.mark.django_db
def test_sync_tags_with_empty_set_clears_associations(post):
    sync_tags(post, [])
    assert post.tags.count() == 0


@pytest.mark.django_db
def test_update_without_image_keeps_stored_reference(category, tags, make_image):
    post = save_post(Post(), _input(category, [], image=make_image()))
    stored = post.image.name

    save_post(post, _input(category, [tags[0].pk], title="Renamed"))

    post.refresh_from_db()
    assert post.title == "Renamed"
    assert post.image.name == stored
    assert default_storage.exists(stored)


@pytest.mark.django_db
def test_new_image_is_stored_under_blog_namespace(category, make_image):
    post = save_post(Post(), _input(category, [], image=make_image("cover.png")))

    assert post.image.name.startswith("blog/")
    assert default_storage.exists(post.image.name)


@pytest.mark.django_db
def test_replacing_image_deletes_previous_blob(category, make_image):
    post = save_post(Post(), _input(category, [], image=make_image("first.png")))
    old = post.image.name

    save_post(post, _input(category, [], image=make_image("second.png", color="blue")))

    post.refresh_from_db()
    assert post.image.name != old
    assert not default_storage.exists(old)
    with default_storage.open(post.image.name) as fh:
        assert fh.read()


@pytest.mark.django_db
def test_storage_write_failure_persists_nothing(monkeypatch, post, category, make_image):
    def boom(self, name, content, max_length=None):
        raise OSError("disk full")

    monkeypatch.setattr(FileSystemStorage, "save", boom)

    with pytest.raises(OSError):
        save_post(post, _input(category, [], image=make_image(), title="Changed"))

    post.refresh_from_db()
    assert post.title == "My post"
    assert post.tags.count() == 2
    assert not post.image


@pytest.mark.django_db
def test_storage_delete_failure_is_logged_not_raised(monkeypatch, caplog, category, make_image):
    post = save_post(Post(), _input(category, [], image=make_image("first.png")))
    old = post.image.name

    def boom(self, name):
        raise OSError("permission denied")

    monkeypatch.setattr(FileSystemStorage, "delete", boom)
    with caplog.at_level(logging.WARNING, logger="blog.services"):
        save_post(post, _input(category, [], image=make_image("second.png")))

    post.refresh_from_db()
    assert post.image.name != old
    assert "Could not delete stored image" in caplog.text
    assert old in caplog.text


@pytest.mark.django_db
def test_database_failure_discards_new_image(monkeypatch, category, tags, make_image, media_root):
    post = save_post(Post(), _input(category, [tags[0].pk], image=make_image("first.png")))
    old = post.image.name

    def broken_sync(post, tag_ids):
        raise RuntimeError("db went away")

    monkeypatch.setattr(services, "sync_tags", broken_sync)
    with pytest.raises(RuntimeError):
        save_post(post, _input(category, [tags[1].pk], image=make_image("second.png"), title="Changed"))

    post.refresh_from_db()
    assert post.title == "My post"
    assert post.image.name == old
    assert default_storage.exists(old)
    assert sorted(p.name for p in (media_root / "blog").iterdir()) == [old.split("/")[-1]]


@pytest.mark.django_db
def test_failed_create_leaves_instance_unsaved(monkeypatch, category):
    def broken_sync(post, tag_ids):
        raise RuntimeError("db went away")

    monkeypatch.setattr(services, "sync_tags", broken_sync)
    post = Post()
    with pytest.raises(RuntimeError):
        save_post(post, _input(category, []))

    assert post.pk is None
    assert Post.objects.count() == 0


@pytest.mark.django_db
def test_any_storage_delete_error_is_logged(monkeypatch, caplog, category, make_image):
    post = save_post(Post(), _input(category, [], image=make_image("first.png")))
    old = post.image.name

    def boom(self, name):
        raise RuntimeError("bucket unavailable")

    monkeypatch.setattr(FileSystemStorage, "delete", boom)
    with caplog.at_level(logging.WARNING, logger="blog.services"):
        save_post(post, _input(category, [], image=make_image("second.png")))

    post.refresh_from_db()
    assert post.image.name != old
    assert "bucket unavailable" in caplog.text
