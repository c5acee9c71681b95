from __future__ import annotations

from .models import AuthorAccount


def author_account(request):
    """
    Provide the signed-in user's content-store author id to templates as
    `current_author_id` ("" for anonymous or unlinked users).
    """
    cached = getattr(request, "_current_author_id", None)
    if cached is not None:
        return {"current_author_id": cached}

    author_id = ""
    user = getattr(request, "user", None)
    if user is not None and user.is_authenticated:
        author_id = (
            AuthorAccount.objects.filter(user=user).values_list("author_id", flat=True).first() or ""
        )
    request._current_author_id = author_id
    return {"current_author_id": author_id}
