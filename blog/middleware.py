OVERRIDABLE_METHODS = {"PUT", "PATCH", "DELETE"}
FORM_CONTENT_TYPES = {"multipart/form-data", "application/x-www-form-urlencoded"}


class MethodOverrideMiddleware:
    """Let HTML forms reach PUT/PATCH/DELETE views through a ``_method`` field.

    Must sit after ``CsrfViewMiddleware``: the token is checked while the
    request is still a POST, and the method is swapped afterwards.
    """

    def __init__(self, get_response):
        self.get_response = get_response

    def __call__(self, request):
        return self.get_response(request)

    def process_view(self, request, view_func, view_args, view_kwargs):
        if request.method == "POST":
            override = request.POST.get("_method", "").upper()
            if override in OVERRIDABLE_METHODS:
                request.method = override
        elif request.method in OVERRIDABLE_METHODS and request.content_type in FORM_CONTENT_TYPES:
            # HttpRequest._load_post_and_files (Django 4.2-5.x) leaves POST and
            # FILES empty unless the method is POST.
            method = request.method
            request.method = "POST"
            request._load_post_and_files()
            request.method = method
        return None
