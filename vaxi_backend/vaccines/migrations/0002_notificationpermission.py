import django.db.models.deletion
from django.conf import settings
from django.db import migrations, models


class Migration(migrations.Migration):

	dependencies = [
		migrations.swappable_dependency(settings.AUTH_USER_MODEL),
		("vaccines", "0001_initial"),
	]

	operations = [
		migrations.CreateModel(
			name="NotificationPermission",
			fields=[
				("id", models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name="ID")),
				("notification", models.BooleanField(default=False)),
				("calendar", models.BooleanField(default=False)),
				("email", models.BooleanField(default=False)),
				("created_at", models.DateTimeField(auto_now_add=True)),
				("updated_at", models.DateTimeField(auto_now=True)),
				("user", models.OneToOneField(on_delete=django.db.models.deletion.CASCADE, related_name="notification_permission", to=settings.AUTH_USER_MODEL)),
			],
		),
	]
