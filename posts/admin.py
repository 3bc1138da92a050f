from django.contrib import admin

from classifieds_admin.admin import HiddenListFilter, excerpt
from pickers.admin import PickerAdminMixin
from .forms import PostAdminForm, CommentAdminForm
from .models import Post, Comment


@admin.register(Post)
class PostAdmin(PickerAdminMixin, admin.ModelAdmin):
    form = PostAdminForm
    list_display = ('title_with_description', 'created_by', 'created_at', 'is_hidden', 'post_tags')
    list_filter = (HiddenListFilter, 'post_type', 'created_at')
    list_select_related = ('user',)
    search_fields = ('title',)
    fieldsets = (
        ('Post details', {
            'description': 'Here you can insert post details such as title, description',
            'fields': (
                ('title', 'description'),
                ('lat', 'lng'),
                ('user', 'post_type'),
                'reward',
                'tags',
            ),
        }),
    )

    @admin.display(description='Title', ordering='title')
    def title_with_description(self, obj):
        return f'{obj.title} ({excerpt(obj.description)})'

    @admin.display(description='Created by', ordering='user__name')
    def created_by(self, obj):
        return obj.user.name

    @admin.display(description='Is hidden?', boolean=True, ordering='deleted_at')
    def is_hidden(self, obj):
        return obj.is_hidden

    @admin.display(description='Post tags')
    def post_tags(self, obj):
        return ', '.join(obj.tags)


@admin.register(Comment)
class CommentAdmin(PickerAdminMixin, admin.ModelAdmin):
    form = CommentAdminForm
    list_display = ('id', 'created_by', 'attached_to_post', 'created_at', 'is_hidden')
    list_filter = (HiddenListFilter, 'created_at')
    list_select_related = ('user', 'post')
    search_fields = ('description', 'post__title', 'user__name')
    fieldsets = (
        ('Comment details', {
            'description': 'Here you can insert comment details such as description, associated post etc.',
            'fields': (
                ('user', 'post'),
                'description',
            ),
        }),
    )

    @admin.display(description='Created by', ordering='user__name')
    def created_by(self, obj):
        return obj.user.name

    @admin.display(description='Attached to post', ordering='post__title')
    def attached_to_post(self, obj):
        return obj.post.title

    @admin.display(description='Is hidden?', boolean=True, ordering='deleted_at')
    def is_hidden(self, obj):
        return obj.is_hidden
