from __future__ import annotations

from django.http import HttpRequest, HttpResponse
from django.shortcuts import redirect, render
from django.urls import reverse

from blog.models import Category, Post, Tag


def home(request: HttpRequest) -> HttpResponse:
    return redirect("blog:index")


def system_status(request: HttpRequest) -> HttpResponse:
    checks = [
        {"name": "Post list", "url": reverse("blog:index"), "ok": True},
        {"name": "Posts API", "url": reverse("blog:api-post-list"), "ok": True},
        {"name": "OpenAPI schema", "url": reverse("schema"), "ok": True},
        {"name": "Swagger docs", "url": reverse("swagger-ui"), "ok": True},
    ]
    stats = {
        "posts": Post.objects.count(),
        "categories": Category.objects.count(),
        "tags": Tag.objects.count(),
    }
    return render(request, "system.html", {"checks": checks, "stats": stats})
