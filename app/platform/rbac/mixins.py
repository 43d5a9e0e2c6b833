"""
RBAC Mixins for ViewSets
"""

import logging

from .utils import is_partner, get_partner_profile

logger = logging.getLogger(__name__)


class PartnerScopeMixin:
    """
    Resolves the requester class once per request.
    Partner-class requesters go through the sharing engine; everyone else
    bypasses it and receives unrestricted projections.
    """

    def is_partner_request(self, request) -> bool:
        cached = getattr(request, "_is_partner", None)
        if cached is None:
            cached = is_partner(request.user)
            request._is_partner = cached
        return cached

    def get_partner_profile(self, request):
        if not hasattr(request, "_partner_profile"):
            request._partner_profile = get_partner_profile(request.user)
        return request._partner_profile
