from __future__ import annotations

from asgiref.sync import iscoroutinefunction, markcoroutinefunction
from django.http import HttpRequest, HttpResponse


NO_STORE_PREFIXES = ("/startup/",)


class NoStoreMiddleware:
    """
    Mark startup pages as non-cacheable for browsers and proxies so every visit
    loads fresh data (and counts a view).
    """

    sync_capable = True
    async_capable = True

    def __init__(self, get_response):
        self.get_response = get_response
        self._is_async = iscoroutinefunction(get_response)
        if self._is_async:
            markcoroutinefunction(self)

    def __call__(self, request: HttpRequest):
        if self._is_async:
            return self.__acall__(request)
        return self._apply(request, self.get_response(request))

    async def __acall__(self, request: HttpRequest) -> HttpResponse:
        response = await self.get_response(request)
        return self._apply(request, response)

    @staticmethod
    def _apply(request: HttpRequest, response: HttpResponse) -> HttpResponse:
        path = request.path or ""
        if any(path.startswith(p) for p in NO_STORE_PREFIXES):
            response["Cache-Control"] = "no-store"
        return response
