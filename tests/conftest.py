from io import BytesIO

import pytest
from django.contrib.auth import get_user_model
from django.core.files.uploadedfile import SimpleUploadedFile
from django.test import Client
from PIL import Image

from blog.models import Category, Post, Tag


@pytest.fixture(autouse=True)
def media_root(settings, tmp_path):
    settings.MEDIA_ROOT = tmp_path / "media"
    return settings.MEDIA_ROOT


@pytest.fixture
def user(db):
    User = get_user_model()
    return User.objects.create_user("demo", email="demo@example.com", password="demo-pass-123")


@pytest.fixture
def auth_client(user):
    client = Client()
    client.force_login(user)
    return client


@pytest.fixture
def category(db):
    return Category.objects.create(name="Engineering")


@pytest.fixture
def tags(db):
    return [Tag.objects.create(name=name) for name in ("python", "django", "notes")]


@pytest.fixture
def post(category, tags):
    p = Post.objects.create(title="My post", slug="my-post", content="Body", category=category)
    p.tags.set(tags[:2])
    return p


@pytest.fixture
def make_image():
    def _make(name="cover.png", color="red"):
        buf = BytesIO()
        Image.new("RGB", (4, 4), color).save(buf, "PNG")
        return SimpleUploadedFile(name, buf.getvalue(), content_type="image/png")

    return _make
