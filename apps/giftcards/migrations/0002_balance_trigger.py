"""
Storage-level balance check for gift card transactions (PostgreSQL only).

Rejects any active transaction that would drive
initial_balance - SUM(active amounts) below zero. Raised as a
check_violation so Django reports it as IntegrityError.
"""

from django.db import migrations


CREATE_TRIGGER = """
CREATE OR REPLACE FUNCTION check_gift_card_balance() RETURNS TRIGGER AS $$
DECLARE
    card_initial NUMERIC(10, 2);
    spent NUMERIC(10, 2);
BEGIN
    IF NEW.deleted_at IS NOT NULL THEN
        RETURN NEW;
    END IF;

    SELECT initial_balance INTO card_initial
    FROM gift_cards
    WHERE id = NEW.gift_card_id;

    SELECT COALESCE(SUM(amount), 0) INTO spent
    FROM gift_card_transactions
    WHERE gift_card_id = NEW.gift_card_id
      AND deleted_at IS NULL
      AND id <> NEW.id;

    IF card_initial - spent - NEW.amount < 0 THEN
        RAISE EXCEPTION 'Insufficient balance on gift card %', NEW.gift_card_id
            USING ERRCODE = 'check_violation', CONSTRAINT = 'check_gift_card_balance';
    END IF;

    RETURN NEW;
END;
$$ LANGUAGE plpgsql;

DROP TRIGGER IF EXISTS check_gift_card_balance ON gift_card_transactions;
CREATE TRIGGER check_gift_card_balance
    BEFORE INSERT OR UPDATE ON gift_card_transactions
    FOR EACH ROW EXECUTE FUNCTION check_gift_card_balance();
"""

DROP_TRIGGER = """
DROP TRIGGER IF EXISTS check_gift_card_balance ON gift_card_transactions;
DROP FUNCTION IF EXISTS check_gift_card_balance();
"""


def create_trigger(apps, schema_editor):
    if schema_editor.connection.vendor != 'postgresql':
        return
    schema_editor.execute(CREATE_TRIGGER)


def drop_trigger(apps, schema_editor):
    if schema_editor.connection.vendor != 'postgresql':
        return
    schema_editor.execute(DROP_TRIGGER)


class Migration(migrations.Migration):

    dependencies = [
        ('giftcards', '0001_initial'),
    ]

    operations = [
        migrations.RunPython(create_trigger, drop_trigger),
    ]
