from django.contrib import admin
from django.contrib.auth.admin import UserAdmin as BaseUserAdmin

from classifieds_admin.admin import HiddenListFilter, excerpt
from .forms import UserAdminCreationForm, UserAdminChangeForm
from .models import User


@admin.register(User)
class UserAdmin(BaseUserAdmin):
    form = UserAdminChangeForm
    add_form = UserAdminCreationForm

    list_display = ('name_with_description', 'email', 'is_verified', 'date_joined', 'updated_at', 'is_active_record', 'user_tags')
    list_filter = ('is_verified', 'is_staff', 'is_active', HiddenListFilter)
    search_fields = ('name', 'email')

    fieldsets = (
        (None, {'fields': ('email', 'password')}),
        ('Description & details', {'fields': ('name', 'avatar', 'description', 'address', 'phone_number', 'date_of_birth', 'ip_address')}),
        ('Permissions', {'fields': ('is_active', 'is_verified', 'is_staff', 'is_superuser', 'groups', 'user_permissions')}),
        ('Dates', {'fields': ('last_login', 'date_joined', 'deleted_at')}),
    )

    add_fieldsets = (
        (None, {'classes': ('wide',), 'fields': ('email', 'name', 'password1', 'password2')}),
    )

    ordering = ('-date_joined',)

    @admin.display(description='Name', ordering='name')
    def name_with_description(self, obj):
        if not obj.description:
            return obj.name
        return f'{obj.name} ({excerpt(obj.description)})'

    @admin.display(description='Is active?', boolean=True, ordering='deleted_at')
    def is_active_record(self, obj):
        return not obj.is_hidden

    @admin.display(description='User tags')
    def user_tags(self, obj):
        return ', '.join(obj.role_tags)
