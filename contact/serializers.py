"""
Contact Serializers

Output representations for contact records. Keys are camelCase to match
the JSON the browser form and admin tools consume.
"""
from rest_framework import serializers

from .models import Contact


class ContactSerializer(serializers.ModelSerializer):
    """
    Full contact record for the admin listing and detail endpoints.
    """

    createdAt = serializers.DateTimeField(source='created_at', read_only=True)
    updatedAt = serializers.DateTimeField(source='updated_at', read_only=True)
    ipAddress = serializers.CharField(source='ip_address', read_only=True, allow_null=True)
    userAgent = serializers.CharField(source='user_agent', read_only=True, allow_null=True)
    formattedDate = serializers.CharField(source='formatted_date', read_only=True)

    class Meta:
        model = Contact
        fields = [
            'id', 'name', 'email', 'phone', 'message', 'status',
            'ipAddress', 'userAgent', 'createdAt', 'updatedAt', 'formattedDate'
        ]
        read_only_fields = fields


class ContactSubmissionSerializer(serializers.ModelSerializer):
    """
    Subset echoed back to the submitter. Phone, message, status and
    request metadata stay server-side.
    """

    createdAt = serializers.DateTimeField(source='created_at', read_only=True)

    class Meta:
        model = Contact
        fields = ['id', 'name', 'email', 'createdAt']
        read_only_fields = fields


class ContactStatusSerializer(serializers.Serializer):
    """Body of the status transition request."""

    status = serializers.CharField(
        required=False, allow_blank=True, default='', trim_whitespace=False
    )


class ContactStatsSerializer(serializers.Serializer):
    total = serializers.IntegerField()
    new = serializers.IntegerField()
    read = serializers.IntegerField()
    replied = serializers.IntegerField()
    recent = serializers.IntegerField()
