from rest_framework import serializers
from .models import User


class UserSerializer(serializers.ModelSerializer):
    password = serializers.CharField(write_only=True)
    role = serializers.ChoiceField(choices=User.ROLE_CHOICES, default=User.ROLE_CLIENT, required=False)

    class Meta:
        model = User
        fields = ('id', 'email', 'username', 'role', 'client_id', 'market', 'password')

    def validate(self, data):
        role = data.get('role', User.ROLE_CLIENT)
        if role == User.ROLE_CLIENT and not data.get('client_id'):
            raise serializers.ValidationError({'client_id': 'Required for client users'})
        if role == User.ROLE_MARKET and not data.get('market'):
            raise serializers.ValidationError({'market': 'Required for market users'})
        return data

    def create(self, validated_data):
        password = validated_data.pop('password')
        user = User.objects.create_user(password=password, **validated_data)
        return user


class LoginSerializer(serializers.Serializer):
    email = serializers.EmailField()
    password = serializers.CharField()

    def validate(self, data):
        try:
            # Buscar el usuario por email
            user = User.objects.get(email=data['email'])
        except User.DoesNotExist:
            raise serializers.ValidationError('Invalid credentials')

        if not user.check_password(data['password']):
            raise serializers.ValidationError('Invalid credentials')
        if not user.is_active:
            raise serializers.ValidationError('User account is disabled')

        data['user'] = user
        return data


class LogoutSerializer(serializers.Serializer):
    refresh = serializers.CharField()
