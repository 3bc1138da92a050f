from django.contrib import admin

from classifieds_admin.admin import HiddenListFilter
from pickers.admin import PickerAdminMixin
from .forms import PrivateMessageAdminForm
from .models import PrivateMessage


@admin.register(PrivateMessage)
class PrivateMessageAdmin(PickerAdminMixin, admin.ModelAdmin):
    form = PrivateMessageAdminForm
    list_display = ('id', 'sender_name', 'receiver_name', 'receiver_id', 'seen', 'deleted_at', 'created_at', 'updated_at')
    list_filter = ('seen', HiddenListFilter)
    list_select_related = ('sender', 'receiver')
    search_fields = ('description', 'sender__name', 'receiver__name')

    @admin.display(description='Sender', ordering='sender__name')
    def sender_name(self, obj):
        return obj.sender.name

    @admin.display(description='Receiver', ordering='receiver__name')
    def receiver_name(self, obj):
        return obj.receiver.name
