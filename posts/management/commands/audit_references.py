from django.core.management.base import BaseCommand

from messaging.models import PrivateMessage
from pickers.core import get_picker, NotFound
from posts.models import Post, Comment


class Command(BaseCommand):
    help = 'Lists visible records whose user or post reference no longer resolves.'

    REFERENCES = (
        (Post, 'user_id', 'users'),
        (Comment, 'user_id', 'users'),
        (Comment, 'post_id', 'posts'),
        (PrivateMessage, 'sender_id', 'users'),
        (PrivateMessage, 'receiver_id', 'users'),
    )

    def handle(self, *args, **options):
        resolved = {}
        stale = 0

        for model, attname, entity_type in self.REFERENCES:
            picker = get_picker(entity_type)
            rows = model.objects.alive().order_by('pk').values_list('pk', attname)
            for pk, key in rows:
                if (entity_type, key) not in resolved:
                    try:
                        picker.resolve_label(key)
                        resolved[(entity_type, key)] = True
                    except NotFound:
                        resolved[(entity_type, key)] = False

                if not resolved[(entity_type, key)]:
                    stale += 1
                    self.stdout.write(
                        f"{model._meta.verbose_name.capitalize()} #{pk}: "
                        f"{attname} points at {entity_type} #{key}, which is no longer available"
                    )

        if stale:
            self.stdout.write(self.style.WARNING(f'{stale} stale reference(s) found.'))
        else:
            self.stdout.write(self.style.SUCCESS('No stale references found.'))
