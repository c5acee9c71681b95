from django.conf import settings
from django.db import models


class AuthorAccount(models.Model):
    """
    Links a site user to their author document in the content store.
    Used to tell a visitor apart from the author whose profile they are viewing.
    """

    user = models.OneToOneField(settings.AUTH_USER_MODEL, on_delete=models.CASCADE, related_name="author_account")
    author_id = models.CharField(
        max_length=120,
        blank=True,
        db_index=True,
        help_text="ID of the matching 'author' document in the content store.",
    )
    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        verbose_name = "Author account"
        verbose_name_plural = "Author accounts"

    def __str__(self) -> str:
        return f"{self.user} → {self.author_id or '(unlinked)'}"

    @property
    def is_linked(self) -> bool:
        return bool(self.author_id)
