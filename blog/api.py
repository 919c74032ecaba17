from rest_framework import generics

from .models import Post
from .pagination import PostPagination
from .serializers import PostSerializer


class PostQuerysetMixin:
    serializer_class = PostSerializer

    def get_queryset(self):
        return Post.objects.select_related("category").prefetch_related("tags")


class PostListAPIView(PostQuerysetMixin, generics.ListAPIView):
    pagination_class = PostPagination


class PostDetailAPIView(PostQuerysetMixin, generics.RetrieveAPIView):
    pass
