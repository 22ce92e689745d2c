from rest_framework import serializers


class ReportQuerySerializer(serializers.Serializer):
    # Both optional; an empty ``month`` means the whole year
    year = serializers.IntegerField(min_value=1000, max_value=9999, required=False, allow_null=True)
    month = serializers.IntegerField(min_value=1, max_value=12, required=False, allow_null=True)
