from __future__ import annotations

from django import forms
from django.utils.translation import gettext_lazy as _

from .models import Category, Post, Tag


class PostForm(forms.ModelForm):
    """Validated input for storing and updating a post.

    ``image`` is declared outside ``Meta.fields`` so that binding the form
    never touches the instance's stored image; replacing the file is left to
    :func:`blog.services.save_post`.
    """

    category = forms.ModelChoiceField(
        queryset=Category.objects.all(),
        empty_label=_("Select a category"),
        widget=forms.Select(attrs={"class": "form-select"}),
    )
    tags = forms.ModelMultipleChoiceField(
        queryset=Tag.objects.all(),
        required=False,
        widget=forms.SelectMultiple(attrs={"class": "form-select"}),
    )
    image = forms.ImageField(
        required=False,
        widget=forms.FileInput(attrs={"class": "form-control"}),
    )

    class Meta:
        model = Post
        fields = ["title", "slug", "content", "category", "tags"]
        widgets = {
            "title": forms.TextInput(attrs={"class": "form-control"}),
            "slug": forms.TextInput(attrs={"class": "form-control"}),
            "content": forms.Textarea(attrs={"class": "form-control", "rows": 10}),
        }
