from pickers.core import EntityPicker, KEY_TEXT, register

from .models import User


@register
class UserPicker(EntityPicker):
    entity_type = 'users'
    model = User
    search_fields = ('name', 'email', KEY_TEXT)
    label_template = '{name} - {email}'

    def get_queryset(self):
        return User.objects.alive()
