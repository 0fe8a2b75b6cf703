"""
Contact Filters

Status and free-text search filters for the contact listing.
"""
import django_filters
from django.db.models import Q

from .models import Contact

SEARCH_FIELDS = ('name', 'email', 'message')


class ContactFilter(django_filters.FilterSet):
    """
    ``status``: exact match, ``all`` or empty means no filter.
    ``search``: case-insensitive substring over name, email or message.
    """

    status = django_filters.CharFilter(method='filter_status')
    search = django_filters.CharFilter(method='filter_search')

    class Meta:
        model = Contact
        fields = ['status']

    def filter_status(self, queryset, name, value):
        if not value or value == 'all':
            return queryset
        return queryset.with_status(value)

    def filter_search(self, queryset, name, value):
        value = value.strip()
        if not value:
            return queryset
        query = Q()
        for field in SEARCH_FIELDS:
            query |= Q(**{f'{field}__icontains': value})
        return queryset.filter(query)
