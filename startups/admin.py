from django.contrib import admin

from .models import AuthorAccount

admin.site.site_header = "YC Directory - Administration"
admin.site.site_title = "YC Directory - Admin"
admin.site.index_title = "Site administration"


@admin.register(AuthorAccount)
class AuthorAccountAdmin(admin.ModelAdmin):
    list_display = ("user", "author_id", "linked", "updated_at")
    search_fields = ("user__username", "user__email", "author_id")
    list_select_related = ("user",)
    readonly_fields = ("created_at", "updated_at")

    @admin.display(boolean=True, description="Linked")
    def linked(self, obj: AuthorAccount) -> bool:
        return obj.is_linked
