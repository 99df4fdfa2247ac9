"""
Core — Pagination

Opt-in page/limit paginator. Lists are returned whole unless the client
sends both ``page`` and ``limit``; limit is clamped to [1, MAX_PAGE_SIZE]
and page to >= 1.

@file core/pagination.py
"""

import math

from rest_framework.pagination import BasePagination
from rest_framework.response import Response

from core.constants import DEFAULT_PAGE_SIZE, MAX_PAGE_SIZE


def _parse_int(raw, default: int) -> int:
    try:
        return int(raw)
    except (TypeError, ValueError):
        return default


class StandardPagination(BasePagination):
    page_query_param = 'page'
    limit_query_param = 'limit'
    default_limit = DEFAULT_PAGE_SIZE
    max_limit = MAX_PAGE_SIZE

    def paginate_queryset(self, queryset, request, view=None):
        params = request.query_params
        if self.page_query_param not in params or self.limit_query_param not in params:
            return None

        self.page = max(1, _parse_int(params[self.page_query_param], 1))
        self.limit = min(self.max_limit, max(1, _parse_int(params[self.limit_query_param], self.default_limit)))
        self.total = queryset.count()
        offset = (self.page - 1) * self.limit
        return list(queryset[offset:offset + self.limit])

    def get_paginated_response(self, data):
        total_pages = math.ceil(self.total / self.limit)
        return Response({
            'results': data,
            'pagination': {
                'page': self.page,
                'limit': self.limit,
                'total': self.total,
                'total_pages': total_pages,
                'has_next': self.page < total_pages,
                'has_prev': self.page > 1,
            },
        })

    def get_paginated_response_schema(self, schema):
        return {
            'type': 'object',
            'properties': {
                'results': schema,
                'pagination': {
                    'type': 'object',
                    'properties': {
                        'page': {'type': 'integer'},
                        'limit': {'type': 'integer'},
                        'total': {'type': 'integer'},
                        'total_pages': {'type': 'integer'},
                        'has_next': {'type': 'boolean'},
                        'has_prev': {'type': 'boolean'},
                    },
                },
            },
        }
