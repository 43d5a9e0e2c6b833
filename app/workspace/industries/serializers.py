# app/workspace/industries/serializers.py
from rest_framework import serializers

from .models import Industry


class IndustrySerializer(serializers.ModelSerializer):
    class Meta:
        model = Industry
        fields = ("id", "name", "status", "created_at", "updated_at")
        read_only_fields = ("id", "created_at", "updated_at")

    def validate_name(self, value):
        value = value.strip()
        if not value:
            raise serializers.ValidationError("Industry name cannot be blank.")
        return value


class PromoteIndustrySerializer(serializers.Serializer):
    name = serializers.CharField(max_length=255)


class MergeIndustrySerializer(serializers.Serializer):
    adhoc_name = serializers.CharField(max_length=255)
    target_industry_id = serializers.PrimaryKeyRelatedField(queryset=Industry.objects.all())


class RenameAdhocIndustrySerializer(serializers.Serializer):
    old_name = serializers.CharField(max_length=255)
    new_name = serializers.CharField(max_length=255)
