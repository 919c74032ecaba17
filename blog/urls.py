from django.urls import path

from . import api, views

app_name = "blog"

urlpatterns = [
    path("posts", views.posts, name="index"),
    path("posts/create", views.create, name="create"),
    path("posts/<int:pk>/edit", views.edit, name="edit"),
    path("posts/<int:pk>", views.update, name="update"),
    path("posts/<slug:slug>/<int:pk>", views.show, name="show"),
    path("login", views.login_view, name="login"),
    path("logout", views.logout_view, name="logout"),
    path("api/posts/", api.PostListAPIView.as_view(), name="api-post-list"),
    path("api/posts/<int:pk>/", api.PostDetailAPIView.as_view(), name="api-post-detail"),
]
