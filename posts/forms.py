import re

from django import forms

from pickers.fields import EntityReferenceField
from users.pickers import UserPicker
from .models import Post, Comment
from .pickers import PostPicker

TAG_SEPARATORS = re.compile(r'[\s,]+')


class TagsField(forms.CharField):
    """Free text input stored as a list of tags, split on spaces and commas."""

    def prepare_value(self, value):
        if isinstance(value, (list, tuple)):
            return ' '.join(value)
        return value

    def to_python(self, value):
        value = super().to_python(value)
        tags = [tag for tag in TAG_SEPARATORS.split(value) if tag]
        return list(dict.fromkeys(tags))


class PostAdminForm(forms.ModelForm):
    user = EntityReferenceField(UserPicker, label='Associate post to user')
    tags = TagsField(required=False, help_text='Separate tags with spaces or commas.')

    class Meta:
        model = Post
        fields = ['title', 'description', 'lat', 'lng', 'user', 'post_type', 'reward', 'tags']
        widgets = {
            'title': forms.TextInput(attrs={'placeholder': 'Enter a title for the post'}),
            'description': forms.Textarea(attrs={'rows': 3, 'placeholder': 'Enter a description for the post'}),
            'lat': forms.NumberInput(attrs={'placeholder': 'Enter the latitude of the post'}),
            'lng': forms.NumberInput(attrs={'placeholder': 'Enter the longitude of the post'}),
        }
        help_texts = {
            'reward': 'RON',
        }


class CommentAdminForm(forms.ModelForm):
    user = EntityReferenceField(UserPicker, label='Associate comment to user')
    post = EntityReferenceField(PostPicker, label='Associate comment to post')

    class Meta:
        model = Comment
        fields = ['user', 'post', 'description']
        widgets = {
            'description': forms.Textarea(attrs={'rows': 3, 'placeholder': 'Enter a description for the comment'}),
        }
