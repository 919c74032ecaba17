from pathlib import Path

import yaml
from django.contrib.auth import get_user_model
from django.core.management.base import BaseCommand, CommandError
from django.db import transaction

from blog.models import Category, Post, Tag
from blog.services import sync_tags

DEFAULT_SEED_PATH = Path(__file__).resolve().parents[2] / "seeds" / "demo.yaml"


class Command(BaseCommand):
    help = "Seed demo user, categories, tags and posts from a YAML file"

    def add_arguments(self, parser):
        parser.add_argument("--file", dest="path", default=str(DEFAULT_SEED_PATH))

    def handle(self, *args, **options):
        path = Path(options["path"])
        if not path.exists():
            raise CommandError(f"Seed file not found: {path}")
        data = yaml.safe_load(path.read_text(encoding="utf-8")) or {}

        with transaction.atomic():
            user_data = data.get("user")
            if user_data:
                User = get_user_model()
                user, _ = User.objects.get_or_create(
                    username=user_data["username"], defaults={"email": user_data.get("email", "")}
                )
                user.set_password(user_data["password"])
                user.save()

            categories = {}
            for name in data.get("categories", []) or []:
                categories[name], _ = Category.objects.get_or_create(name=name)
            tags = {}
            for name in data.get("tags", []) or []:
                tags[name], _ = Tag.objects.get_or_create(name=name)

            for item in data.get("posts", []) or []:
                try:
                    category = categories[item["category"]]
                    tag_ids = {tags[name].pk for name in item.get("tags", []) or []}
                except KeyError as exc:
                    raise CommandError(f"Post {item.get('slug')!r} references unknown {exc}") from exc
                post, _ = Post.objects.update_or_create(
                    slug=item["slug"],
                    defaults=dict(
                        title=item["title"],
                        content=item["content"],
                        category=category,
                    ),
                )
                sync_tags(post, tag_ids)

        self.stdout.write(
            self.style.SUCCESS(
                f"Seeded {len(categories)} categories, {len(tags)} tags, {len(data.get('posts', []) or [])} posts."
            )
        )
