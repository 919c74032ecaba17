from django.conf import settings
from django.core.paginator import EmptyPage, PageNotAnInteger, Paginator
from rest_framework.pagination import PageNumberPagination


def page_size() -> int:
    return getattr(settings, "BLOG_PAGE_SIZE", 10)


class LenientPaginator(Paginator):
    """Paginator that yields an empty page past the end instead of raising."""

    def validate_number(self, number):
        try:
            return super().validate_number(number)
        except EmptyPage:
            number = int(number)
            if number < 1:
                raise
            return number

    def page(self, number):
        number = self.validate_number(number)
        if number > self.num_pages:
            return self._get_page([], number, self)
        return super().page(number)


class PostPagination(PageNumberPagination):
    django_paginator_class = LenientPaginator

    def __init__(self):
        self.page_size = page_size()

    def get_page_number(self, request, paginator):
        number = super().get_page_number(request, paginator)
        try:
            paginator.validate_number(number)
        except PageNotAnInteger:
            return 1
        except EmptyPage:
            # below 1; paginate_queryset reports it as NotFound
            return number
        return number
