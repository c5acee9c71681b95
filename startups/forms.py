from __future__ import annotations

from django import forms


class StartupSearchForm(forms.Form):
    query = forms.CharField(
        required=False,
        max_length=100,
        widget=forms.TextInput(attrs={"placeholder": "Search Startups", "class": "search-input", "autocomplete": "off"}),
    )

    def clean_query(self) -> str:
        # GROQ `match` treats these as wildcards/operators.
        q = (self.cleaned_data.get("query") or "").strip()
        return "".join(ch for ch in q if ch not in '*"\\')
