from django.contrib import admin


class HiddenListFilter(admin.SimpleListFilter):
    title = 'hidden records'
    parameter_name = 'trashed'

    def lookups(self, request, model_admin):
        return (
            ('without', 'Without hidden records'),
            ('only', 'Only hidden records'),
        )

    def queryset(self, request, queryset):
        if self.value() == 'without':
            return queryset.filter(deleted_at__isnull=True)
        if self.value() == 'only':
            return queryset.filter(deleted_at__isnull=False)
        return queryset


def excerpt(text, length=16):
    return f'{(text or "")[:length]}...'
