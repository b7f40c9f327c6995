# Generated manually for the reimbursements app

import uuid
from decimal import Decimal
from django.conf import settings
from django.db import migrations, models
import django.db.models.deletion


class Migration(migrations.Migration):

    initial = True

    dependencies = [
        ('accounts', '0001_initial'),
        ('orders', '0001_initial'),
        migrations.swappable_dependency(settings.AUTH_USER_MODEL),
    ]

    operations = [
        migrations.CreateModel(
            name='Reimbursement',
            fields=[
                ('id', models.UUIDField(default=uuid.uuid4, editable=False, primary_key=True, serialize=False)),
                ('amount', models.DecimalField(decimal_places=2, max_digits=10)),
                ('status', models.CharField(choices=[('unpaid', 'Unpaid'), ('paid', 'Paid'), ('completed', 'Completed'), ('settled', 'Settled')], default='unpaid', max_length=20)),
                ('description', models.CharField(blank=True, max_length=255)),
                ('settled_at', models.DateTimeField(blank=True, null=True)),
                ('transaction_reference', models.CharField(blank=True, max_length=255)),
                ('created_at', models.DateTimeField(auto_now_add=True)),
                ('updated_at', models.DateTimeField(auto_now=True)),
                ('creditor', models.ForeignKey(on_delete=django.db.models.deletion.CASCADE, related_name='reimbursements_due', to=settings.AUTH_USER_MODEL)),
                ('debtor', models.ForeignKey(on_delete=django.db.models.deletion.CASCADE, related_name='reimbursements_owed', to=settings.AUTH_USER_MODEL)),
                ('order', models.ForeignKey(on_delete=django.db.models.deletion.CASCADE, related_name='reimbursements', to='orders.order')),
                ('payment_method', models.ForeignKey(blank=True, null=True, on_delete=django.db.models.deletion.SET_NULL, related_name='reimbursements', to='accounts.paymentmethod')),
            ],
            options={
                'db_table': 'reimbursements',
                'ordering': ['-created_at'],
                'indexes': [
                    models.Index(fields=['debtor', 'status'], name='reimburseme_debtor__6a1b3c_idx'),
                    models.Index(fields=['creditor', 'status'], name='reimburseme_credito_8d2e4f_idx'),
                ],
                'constraints': [
                    models.UniqueConstraint(fields=('debtor', 'creditor', 'order'), name='unique_reimbursement_per_order_pair'),
                    models.CheckConstraint(condition=models.Q(('debtor', models.F('creditor')), _negated=True), name='reimbursement_debtor_not_creditor'),
                    models.CheckConstraint(condition=models.Q(('amount__gt', Decimal('0'))), name='reimbursement_amount_positive'),
                ],
            },
        ),
    ]
