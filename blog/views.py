from __future__ import annotations

import logging

from allauth.account.forms import LoginForm
from django.contrib import messages
from django.contrib.auth import logout as auth_logout
from django.contrib.auth.decorators import login_required
from django.core.paginator import EmptyPage, PageNotAnInteger
from django.http import Http404, HttpRequest, HttpResponse
from django.shortcuts import get_object_or_404, redirect, render
from django.urls import reverse
from django.utils.http import url_has_allowed_host_and_scheme
from django.utils.translation import gettext as _
from django.views.decorators.http import require_GET, require_http_methods

from .forms import PostForm
from .models import Post
from .pagination import LenientPaginator, page_size
from .services import PostInput, save_post

logger = logging.getLogger(__name__)


def _posts():
    return Post.objects.select_related("category").prefetch_related("tags")


def _form_context(form: PostForm, post: Post) -> dict:
    return {"form": form, "post": post}


@require_http_methods(["GET", "POST"])
def posts(request: HttpRequest) -> HttpResponse:
    if request.method == "POST":
        return store(request)
    return index(request)


def index(request: HttpRequest) -> HttpResponse:
    paginator = LenientPaginator(_posts(), page_size())
    try:
        page = paginator.page(request.GET.get("page", 1))
    except PageNotAnInteger:
        page = paginator.page(1)
    except EmptyPage:
        raise Http404("Invalid page")
    return render(request, "blog/index.html", {"page_obj": page, "posts": page.object_list})


@require_GET
def show(request: HttpRequest, slug: str, pk: int) -> HttpResponse:
    post = get_object_or_404(_posts(), pk=pk)
    if post.slug != slug:
        return redirect(post)
    return render(request, "blog/show.html", {"post": post})


@login_required
@require_GET
def create(request: HttpRequest) -> HttpResponse:
    post = Post()
    return render(request, "blog/create.html", _form_context(PostForm(instance=post), post))


@login_required
def store(request: HttpRequest) -> HttpResponse:
    form = PostForm(request.POST, request.FILES)
    if not form.is_valid():
        return render(request, "blog/create.html", _form_context(form, form.instance))
    post = save_post(form.instance, PostInput.from_form(form))
    messages.success(request, _("The post has been saved."))
    return redirect(post)


@login_required
@require_GET
def edit(request: HttpRequest, pk: int) -> HttpResponse:
    post = get_object_or_404(Post, pk=pk)
    return render(request, "blog/edit.html", _form_context(PostForm(instance=post), post))


@login_required
@require_http_methods(["PUT", "PATCH"])
def update(request: HttpRequest, pk: int) -> HttpResponse:
    post = get_object_or_404(Post, pk=pk)
    form = PostForm(request.POST, request.FILES, instance=post)
    if not form.is_valid():
        return render(request, "blog/edit.html", _form_context(form, post))
    post = save_post(post, PostInput.from_form(form))
    messages.success(request, _("The post has been updated."))
    return redirect(post)


@require_http_methods(["GET", "POST"])
def login_view(request: HttpRequest) -> HttpResponse:
    next_url = request.POST.get("next") or request.GET.get("next") or ""
    form = LoginForm(data=request.POST if request.method == "POST" else None, request=request)
    if request.method == "POST" and form.is_valid():
        if not url_has_allowed_host_and_scheme(
            next_url, allowed_hosts={request.get_host()}, require_https=request.is_secure()
        ):
            next_url = reverse("blog:index")
        logger.info("User %s logged in", form.user.pk)
        return form.login(request, redirect_url=next_url)
    return render(request, "auth/login.html", {"form": form, "next": next_url})


@login_required
@require_http_methods(["DELETE"])
def logout_view(request: HttpRequest) -> HttpResponse:
    logger.info("User %s logged out", request.user.pk)
    auth_logout(request)
    return redirect("blog:index")
