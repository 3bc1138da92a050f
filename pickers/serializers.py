from rest_framework import serializers


class PickerOptionSerializer(serializers.Serializer):
    id = serializers.IntegerField(help_text="Key of the referenced record")
    text = serializers.CharField(help_text="Display label of the referenced record")


class PickerPaginationSerializer(serializers.Serializer):
    more = serializers.BooleanField()


class PickerSearchResponseSerializer(serializers.Serializer):
    results = PickerOptionSerializer(many=True)
    pagination = PickerPaginationSerializer()

    @classmethod
    def from_options(cls, options):
        return cls({
            'results': [{'id': key, 'text': label} for key, label in options.items()],
            'pagination': {'more': False},
        })


class PickerLabelSerializer(serializers.Serializer):
    id = serializers.CharField(help_text="Key that was resolved")
    text = serializers.CharField(help_text="Display label of the referenced record")
