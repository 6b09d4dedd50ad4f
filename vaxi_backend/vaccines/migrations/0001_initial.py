import datetime

import django.db.models.deletion
from django.db import migrations, models


class Migration(migrations.Migration):

	initial = True

	dependencies = [
		("subjects", "0001_initial"),
	]

	operations = [
		migrations.CreateModel(
			name="Vaccine",
			fields=[
				("id", models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name="ID")),
				("name", models.CharField(max_length=200)),
				("type", models.CharField(db_index=True, default="Mandatory", max_length=50)),
				("category", models.CharField(blank=True, default="", max_length=50)),
				("sub_category", models.CharField(blank=True, default="", max_length=50)),
				("min_age_months", models.IntegerField(default=0)),
				("max_age_months", models.IntegerField(blank=True, null=True)),
				("total_doses", models.PositiveSmallIntegerField(blank=True, null=True)),
				("frequency", models.CharField(blank=True, default="", max_length=200)),
				("when_to_give", models.TextField(blank=True, default="")),
				("dose", models.CharField(blank=True, default="", max_length=50)),
				("route", models.CharField(blank=True, default="", max_length=50)),
				("site", models.CharField(blank=True, default="", max_length=100)),
				("notes", models.TextField(blank=True, default="")),
				("is_active", models.BooleanField(default=True)),
				("created_at", models.DateTimeField(auto_now_add=True)),
				("updated_at", models.DateTimeField(auto_now=True)),
			],
			options={
				"ordering": ["min_age_months", "name", "id"],
			},
		),
		migrations.CreateModel(
			name="VaccineDoseOffset",
			fields=[
				("id", models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name="ID")),
				("dose_number", models.PositiveSmallIntegerField()),
				("min_age_days", models.IntegerField()),
				("notes", models.CharField(blank=True, default="", max_length=255)),
				("vaccine", models.ForeignKey(on_delete=django.db.models.deletion.CASCADE, related_name="dose_offsets", to="vaccines.vaccine")),
			],
			options={
				"ordering": ["vaccine_id", "dose_number"],
				"constraints": [
					models.UniqueConstraint(fields=("vaccine", "dose_number"), name="uniq_offset_per_vaccine_dose"),
				],
			},
		),
		migrations.CreateModel(
			name="DoseInstance",
			fields=[
				("id", models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name="ID")),
				("dose_number", models.PositiveSmallIntegerField()),
				("scheduled_date", models.DateField()),
				("status", models.CharField(choices=[("upcoming", "upcoming"), ("due_soon", "due_soon"), ("overdue", "overdue"), ("completed", "completed")], default="upcoming", max_length=20)),
				("completed_date", models.DateField(blank=True, null=True)),
				("city", models.CharField(blank=True, default="", max_length=100)),
				("image", models.CharField(blank=True, default="", max_length=255)),
				("notes", models.TextField(blank=True, default="")),
				("is_active", models.BooleanField(default=True)),
				("created_at", models.DateTimeField(auto_now_add=True)),
				("updated_at", models.DateTimeField(auto_now=True)),
				("subject", models.ForeignKey(on_delete=django.db.models.deletion.CASCADE, related_name="dose_instances", to="subjects.subject")),
				("vaccine", models.ForeignKey(on_delete=django.db.models.deletion.CASCADE, related_name="dose_instances", to="vaccines.vaccine")),
			],
			options={
				"ordering": ["subject_id", "scheduled_date", "vaccine_id", "dose_number"],
				"indexes": [
					models.Index(fields=["subject", "scheduled_date"], name="vaccines_dose_subj_date_idx"),
					models.Index(fields=["status"], name="vaccines_dose_status_idx"),
				],
				"constraints": [
					models.UniqueConstraint(fields=("subject", "vaccine", "dose_number"), name="uniq_dose_per_subject_vaccine"),
				],
			},
		),
		migrations.CreateModel(
			name="VaccineReminder",
			fields=[
				("id", models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name="ID")),
				("title", models.CharField(max_length=200)),
				("message", models.TextField(blank=True, default="")),
				("reminder_date", models.DateField()),
				("reminder_time", models.TimeField(default=datetime.time(9, 0))),
				("frequency", models.CharField(choices=[("once", "once"), ("daily", "daily"), ("weekly", "weekly"), ("monthly", "monthly")], default="once", max_length=10)),
				("status", models.CharField(choices=[("active", "active"), ("completed", "completed"), ("cancelled", "cancelled")], default="active", max_length=10)),
				("is_active", models.BooleanField(default=True)),
				("created_at", models.DateTimeField(auto_now_add=True)),
				("updated_at", models.DateTimeField(auto_now=True)),
				("dose", models.ForeignKey(on_delete=django.db.models.deletion.CASCADE, related_name="reminders", to="vaccines.doseinstance")),
			],
			options={
				"ordering": ["reminder_date", "reminder_time", "id"],
				"indexes": [
					models.Index(fields=["dose", "status"], name="vaccines_rem_dose_status_idx"),
					models.Index(fields=["reminder_date", "status"], name="vaccines_rem_date_status_idx"),
				],
			},
		),
		migrations.CreateModel(
			name="VaccinationRecord",
			fields=[
				("id", models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name="ID")),
				("status", models.CharField(choices=[("Pending", "Pending"), ("Completed", "Completed"), ("Missed", "Missed"), ("Scheduled", "Scheduled")], default="Pending", max_length=20)),
				("given_date", models.DateField(blank=True, null=True)),
				("scheduled_date", models.DateField(blank=True, null=True)),
				("notes", models.TextField(blank=True, default="")),
				("is_active", models.BooleanField(default=True)),
				("created_at", models.DateTimeField(auto_now_add=True)),
				("updated_at", models.DateTimeField(auto_now=True)),
				("subject", models.ForeignKey(on_delete=django.db.models.deletion.CASCADE, related_name="vaccination_records", to="subjects.subject")),
				("vaccine", models.ForeignKey(on_delete=django.db.models.deletion.CASCADE, related_name="vaccination_records", to="vaccines.vaccine")),
			],
			options={
				"ordering": ["subject_id", "-given_date", "id"],
				"constraints": [
					models.UniqueConstraint(fields=("subject", "vaccine"), name="uniq_record_per_subject_vaccine"),
				],
			},
		),
		migrations.CreateModel(
			name="PlannerEntry",
			fields=[
				("id", models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name="ID")),
				("scheduled_date", models.DateField()),
				("status", models.CharField(choices=[("upcoming", "upcoming"), ("overdue", "overdue"), ("completed", "completed"), ("skipped", "skipped")], default="upcoming", max_length=20)),
				("priority", models.CharField(choices=[("low", "low"), ("medium", "medium"), ("high", "high"), ("urgent", "urgent")], default="medium", max_length=10)),
				("completed_date", models.DateField(blank=True, null=True)),
				("given_at", models.CharField(blank=True, default="", max_length=100)),
				("notes", models.TextField(blank=True, default="")),
				("reminder_title", models.CharField(blank=True, default="", max_length=200)),
				("reminder_message", models.TextField(blank=True, default="")),
				("reminder_date", models.DateField(blank=True, null=True)),
				("reminder_time", models.TimeField(default=datetime.time(9, 0))),
				("is_reminder", models.BooleanField(default=True)),
				("is_active", models.BooleanField(default=True)),
				("created_at", models.DateTimeField(auto_now_add=True)),
				("updated_at", models.DateTimeField(auto_now=True)),
				("subject", models.ForeignKey(on_delete=django.db.models.deletion.CASCADE, related_name="planner_entries", to="subjects.subject")),
				("vaccine", models.ForeignKey(on_delete=django.db.models.deletion.CASCADE, related_name="planner_entries", to="vaccines.vaccine")),
			],
			options={
				"ordering": ["subject_id", "scheduled_date", "id"],
				"indexes": [
					models.Index(fields=["subject", "scheduled_date"], name="vaccines_plan_subj_date_idx"),
					models.Index(fields=["reminder_date"], name="vaccines_plan_reminder_idx"),
				],
				"constraints": [
					models.UniqueConstraint(fields=("subject", "vaccine", "scheduled_date"), name="uniq_planner_subject_vaccine_date"),
				],
			},
		),
	]
