from pickers.core import EntityPicker, KEY_TEXT, register

from .models import Post


@register
class PostPicker(EntityPicker):
    entity_type = 'posts'
    model = Post
    search_fields = ('title', 'description', KEY_TEXT)
    label_template = '{title} - {user.name}'
    select_related = ('user',)

    def get_queryset(self):
        return Post.objects.alive()
