"""Baseline migration - surrogacy admin schema

Revision ID: 0001_baseline
Revises:
Create Date: 2026-10-19

Creates every table for the admin API: participants and staff, matches,
cases and journeys with their stage history, messaging, tasks,
appointments, ledger and payments, medical screening and records,
contracts and baby watch updates.
"""
from typing import Sequence, Union

from alembic import op


# revision identifiers, used by Alembic.
revision: str = '0001_baseline'
down_revision: Union[str, Sequence[str], None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


TABLES_IN_DROP_ORDER = (
    'baby_watch_updates',
    'contracts',
    'medications',
    'medical_records',
    'documents',
    'medical_screenings',
    'payments',
    'agency_transactions',
    'appointments',
    'tasks',
    'messages',
    'conversation_participants',
    'conversations',
    'journey_milestones',
    'journey_stage_history',
    'journeys',
    'case_stage_history',
    'cases',
    'matches',
    'users',
)


def upgrade() -> None:
    """Create the admin schema."""

    op.execute('CREATE EXTENSION IF NOT EXISTS pgcrypto')  # For gen_random_uuid()

    # ==========================================================================
    # Users (participants and staff)
    # ==========================================================================
    op.execute('''
        CREATE TABLE users (
            id UUID PRIMARY KEY DEFAULT gen_random_uuid(),
            role VARCHAR(30) NOT NULL,
            email VARCHAR(255) UNIQUE,
            first_name VARCHAR(100),
            last_name VARCHAR(100),
            status VARCHAR(50),
            source VARCHAR(50),
            form_data JSONB,
            form2 JSONB,
            form2_data JSONB,
            parent1 JSONB,
            parent2 JSONB,
            surrogate_related JSONB,
            about JSONB,
            attributes JSONB,
            profile_completed BOOLEAN NOT NULL DEFAULT false,
            form2_completed BOOLEAN NOT NULL DEFAULT false,
            admin_notes TEXT,
            medical_clearance_status VARCHAR(20),
            profile_image_url TEXT,
            is_active BOOLEAN NOT NULL DEFAULT true,
            token_version INTEGER NOT NULL DEFAULT 1,
            created_at TIMESTAMPTZ NOT NULL DEFAULT now(),
            updated_at TIMESTAMPTZ NOT NULL DEFAULT now()
        )
    ''')
    op.execute('CREATE INDEX idx_users_role_status ON users(role, status)')
    op.execute('CREATE INDEX idx_users_created ON users(created_at)')

    # ==========================================================================
    # Matches
    # ==========================================================================
    op.execute('''
        CREATE TABLE matches (
            id UUID PRIMARY KEY DEFAULT gen_random_uuid(),
            parent_id UUID NOT NULL REFERENCES users(id) ON DELETE CASCADE,
            surrogate_id UUID REFERENCES users(id) ON DELETE SET NULL,
            status VARCHAR(20) NOT NULL DEFAULT 'Proposed',
            match_score NUMERIC(5, 2),
            match_criteria JSONB,
            agency_notes TEXT,
            matched_at TIMESTAMPTZ,
            parent_accepted BOOLEAN NOT NULL DEFAULT false,
            parent_declined BOOLEAN NOT NULL DEFAULT false,
            surrogate_accepted BOOLEAN NOT NULL DEFAULT false,
            surrogate_declined BOOLEAN NOT NULL DEFAULT false,
            created_at TIMESTAMPTZ NOT NULL DEFAULT now(),
            updated_at TIMESTAMPTZ NOT NULL DEFAULT now()
        )
    ''')
    op.execute('CREATE INDEX ix_matches_parent_id ON matches(parent_id)')
    op.execute('CREATE INDEX ix_matches_surrogate_id ON matches(surrogate_id)')
    op.execute('CREATE INDEX idx_matches_status_created ON matches(status, created_at)')

    # ==========================================================================
    # Cases and stage history
    # ==========================================================================
    op.execute('''
        CREATE TABLE cases (
            id UUID PRIMARY KEY DEFAULT gen_random_uuid(),
            surrogate_id UUID REFERENCES users(id) ON DELETE SET NULL,
            parent_id UUID REFERENCES users(id) ON DELETE SET NULL,
            surrogate_name VARCHAR(255) NOT NULL DEFAULT '',
            parent_name VARCHAR(255) NOT NULL DEFAULT '',
            current_stage VARCHAR(30) NOT NULL DEFAULT 'Matching',
            notes TEXT,
            created_at TIMESTAMPTZ NOT NULL DEFAULT now(),
            updated_at TIMESTAMPTZ NOT NULL DEFAULT now()
        )
    ''')
    op.execute('CREATE INDEX idx_cases_stage_updated ON cases(current_stage, updated_at)')

    op.execute('''
        CREATE TABLE case_stage_history (
            id UUID PRIMARY KEY DEFAULT gen_random_uuid(),
            case_id UUID NOT NULL REFERENCES cases(id) ON DELETE CASCADE,
            stage VARCHAR(30) NOT NULL,
            completed_at TIMESTAMPTZ NOT NULL,
            completed_by_user_id UUID REFERENCES users(id) ON DELETE SET NULL,
            notes TEXT
        )
    ''')
    op.execute(
        'CREATE INDEX idx_case_history_case_completed ON case_stage_history(case_id, completed_at)'
    )

    # ==========================================================================
    # Journeys, stage history, milestones
    # ==========================================================================
    op.execute('''
        CREATE TABLE journeys (
            id UUID PRIMARY KEY DEFAULT gen_random_uuid(),
            case_number VARCHAR(20) UNIQUE NOT NULL,
            match_id UUID REFERENCES matches(id) ON DELETE SET NULL,
            parent_id UUID REFERENCES users(id) ON DELETE SET NULL,
            surrogate_id UUID REFERENCES users(id) ON DELETE SET NULL,
            case_manager_id UUID REFERENCES users(id) ON DELETE SET NULL,
            status VARCHAR(30) NOT NULL DEFAULT 'Medical Screening',
            estimated_delivery_date DATE,
            medical_records JSONB,
            legal_agreements JSONB,
            journey_notes JSONB,
            created_at TIMESTAMPTZ NOT NULL DEFAULT now(),
            updated_at TIMESTAMPTZ NOT NULL DEFAULT now(),
            completed_at TIMESTAMPTZ,
            cancelled_at TIMESTAMPTZ
        )
    ''')
    op.execute('CREATE INDEX idx_journeys_status_created ON journeys(status, created_at)')
    op.execute('CREATE INDEX ix_journeys_match_id ON journeys(match_id)')

    op.execute('''
        CREATE TABLE journey_stage_history (
            id UUID PRIMARY KEY DEFAULT gen_random_uuid(),
            journey_id UUID NOT NULL REFERENCES journeys(id) ON DELETE CASCADE,
            stage VARCHAR(30) NOT NULL,
            completed_at TIMESTAMPTZ NOT NULL,
            completed_by_user_id UUID REFERENCES users(id) ON DELETE SET NULL,
            notes TEXT
        )
    ''')
    op.execute(
        'CREATE INDEX idx_journey_history_journey_completed '
        'ON journey_stage_history(journey_id, completed_at)'
    )

    op.execute('''
        CREATE TABLE journey_milestones (
            id UUID PRIMARY KEY DEFAULT gen_random_uuid(),
            journey_id UUID NOT NULL REFERENCES journeys(id) ON DELETE CASCADE,
            title VARCHAR(255) NOT NULL,
            description TEXT,
            type VARCHAR(50),
            scheduled_date DATE,
            completed_date DATE,
            status VARCHAR(20) NOT NULL DEFAULT 'pending',
            notes TEXT,
            assigned_to JSONB,
            created_at TIMESTAMPTZ NOT NULL DEFAULT now(),
            updated_at TIMESTAMPTZ NOT NULL DEFAULT now()
        )
    ''')
    op.execute(
        'CREATE INDEX idx_journey_milestones_journey_scheduled '
        'ON journey_milestones(journey_id, scheduled_date)'
    )

    # ==========================================================================
    # Messaging
    # ==========================================================================
    op.execute('''
        CREATE TABLE conversations (
            id UUID PRIMARY KEY DEFAULT gen_random_uuid(),
            last_message TEXT,
            last_message_at TIMESTAMPTZ,
            created_by_user_id UUID REFERENCES users(id) ON DELETE SET NULL,
            created_at TIMESTAMPTZ NOT NULL DEFAULT now()
        )
    ''')
    op.execute('CREATE INDEX idx_conversations_last_message_at ON conversations(last_message_at)')

    op.execute('''
        CREATE TABLE conversation_participants (
            id UUID PRIMARY KEY DEFAULT gen_random_uuid(),
            conversation_id UUID NOT NULL REFERENCES conversations(id) ON DELETE CASCADE,
            user_id UUID NOT NULL REFERENCES users(id) ON DELETE CASCADE,
            display_name VARCHAR(255) NOT NULL,
            unread_count INTEGER NOT NULL DEFAULT 0,
            CONSTRAINT uq_conversation_participant UNIQUE (conversation_id, user_id)
        )
    ''')
    op.execute(
        'CREATE INDEX idx_conversation_participants_user ON conversation_participants(user_id)'
    )

    op.execute('''
        CREATE TABLE messages (
            id UUID PRIMARY KEY DEFAULT gen_random_uuid(),
            conversation_id UUID NOT NULL REFERENCES conversations(id) ON DELETE CASCADE,
            sender_id UUID REFERENCES users(id) ON DELETE SET NULL,
            sender_name VARCHAR(255),
            content TEXT,
            media_url TEXT,
            media_type VARCHAR(10),
            reply_to_id UUID REFERENCES messages(id) ON DELETE SET NULL,
            created_at TIMESTAMPTZ NOT NULL DEFAULT now()
        )
    ''')
    op.execute(
        'CREATE INDEX idx_messages_conversation_created ON messages(conversation_id, created_at)'
    )

    # ==========================================================================
    # Tasks and appointments
    # ==========================================================================
    op.execute('''
        CREATE TABLE tasks (
            id UUID PRIMARY KEY DEFAULT gen_random_uuid(),
            assignee_id UUID REFERENCES users(id) ON DELETE SET NULL,
            assignee_name VARCHAR(255),
            title VARCHAR(255) NOT NULL,
            description TEXT,
            due_date DATE,
            is_completed BOOLEAN NOT NULL DEFAULT false,
            completed_at TIMESTAMPTZ,
            created_by_user_id UUID REFERENCES users(id) ON DELETE SET NULL,
            created_at TIMESTAMPTZ NOT NULL DEFAULT now(),
            updated_at TIMESTAMPTZ NOT NULL DEFAULT now()
        )
    ''')
    op.execute('CREATE INDEX idx_tasks_assignee_status ON tasks(assignee_id, is_completed)')
    op.execute('CREATE INDEX idx_tasks_due ON tasks(due_date)')

    op.execute('''
        CREATE TABLE appointments (
            id UUID PRIMARY KEY DEFAULT gen_random_uuid(),
            title VARCHAR(255) NOT NULL,
            type VARCHAR(20) NOT NULL DEFAULT 'general',
            status VARCHAR(20) NOT NULL DEFAULT 'scheduled',
            appointment_date DATE NOT NULL,
            appointment_time TIME,
            duration_minutes INTEGER,
            location VARCHAR(255),
            participant_id UUID REFERENCES users(id) ON DELETE SET NULL,
            participant_name VARCHAR(255),
            notes TEXT,
            created_at TIMESTAMPTZ NOT NULL DEFAULT now(),
            updated_at TIMESTAMPTZ NOT NULL DEFAULT now()
        )
    ''')
    op.execute(
        'CREATE INDEX idx_appointments_date_time ON appointments(appointment_date, appointment_time)'
    )
    op.execute('CREATE INDEX idx_appointments_type ON appointments(type)')

    # ==========================================================================
    # Ledger and payments
    # ==========================================================================
    op.execute('''
        CREATE TABLE agency_transactions (
            id UUID PRIMARY KEY DEFAULT gen_random_uuid(),
            type VARCHAR(20) NOT NULL,
            category VARCHAR(30) NOT NULL,
            amount NUMERIC(12, 2) NOT NULL,
            transaction_date DATE NOT NULL,
            description TEXT,
            status VARCHAR(20) NOT NULL DEFAULT 'Pending',
            payment_method VARCHAR(50),
            reference VARCHAR(100),
            journey_id UUID REFERENCES journeys(id) ON DELETE SET NULL,
            case_number VARCHAR(20),
            created_by_user_id UUID REFERENCES users(id) ON DELETE SET NULL,
            created_at TIMESTAMPTZ NOT NULL DEFAULT now(),
            updated_at TIMESTAMPTZ NOT NULL DEFAULT now()
        )
    ''')
    op.execute('CREATE INDEX idx_transactions_date ON agency_transactions(transaction_date)')
    op.execute('CREATE INDEX idx_transactions_journey ON agency_transactions(journey_id)')
    op.execute('CREATE INDEX idx_transactions_type_status ON agency_transactions(type, status)')

    op.execute('''
        CREATE TABLE payments (
            id UUID PRIMARY KEY DEFAULT gen_random_uuid(),
            surrogate_id UUID REFERENCES users(id) ON DELETE SET NULL,
            surrogate_name VARCHAR(255),
            journey_id UUID REFERENCES journeys(id) ON DELETE SET NULL,
            type VARCHAR(30) NOT NULL,
            category VARCHAR(20),
            amount NUMERIC(12, 2) NOT NULL,
            status VARCHAR(20) NOT NULL DEFAULT 'Pending',
            due_date DATE,
            paid_date DATE,
            description TEXT,
            invoice_number VARCHAR(50),
            invoice_url TEXT,
            created_at TIMESTAMPTZ NOT NULL DEFAULT now(),
            updated_at TIMESTAMPTZ NOT NULL DEFAULT now()
        )
    ''')
    op.execute('CREATE INDEX idx_payments_surrogate_due ON payments(surrogate_id, due_date)')
    op.execute('CREATE INDEX idx_payments_status ON payments(status)')

    # ==========================================================================
    # Medical
    # ==========================================================================
    op.execute('''
        CREATE TABLE medical_screenings (
            id UUID PRIMARY KEY DEFAULT gen_random_uuid(),
            surrogate_id UUID NOT NULL REFERENCES users(id) ON DELETE CASCADE,
            status VARCHAR(20) NOT NULL DEFAULT 'Pending',
            screening_type VARCHAR(50),
            clinic_name VARCHAR(255),
            physician_name VARCHAR(255),
            results JSONB,
            notes TEXT,
            submitted_at TIMESTAMPTZ NOT NULL DEFAULT now(),
            reviewed_at TIMESTAMPTZ,
            reviewed_by_user_id UUID REFERENCES users(id) ON DELETE SET NULL,
            review_notes TEXT,
            clearance_date DATE
        )
    ''')
    op.execute(
        'CREATE INDEX idx_screenings_surrogate_submitted '
        'ON medical_screenings(surrogate_id, submitted_at)'
    )
    op.execute('CREATE INDEX idx_screenings_status ON medical_screenings(status)')

    op.execute('''
        CREATE TABLE documents (
            id UUID PRIMARY KEY DEFAULT gen_random_uuid(),
            screening_id UUID REFERENCES medical_screenings(id) ON DELETE CASCADE,
            journey_id UUID REFERENCES journeys(id) ON DELETE CASCADE,
            name VARCHAR(255) NOT NULL,
            document_type VARCHAR(50),
            url TEXT NOT NULL,
            status VARCHAR(20) NOT NULL DEFAULT 'pending',
            uploaded_at TIMESTAMPTZ NOT NULL DEFAULT now()
        )
    ''')
    op.execute('CREATE INDEX idx_documents_screening ON documents(screening_id)')
    op.execute('CREATE INDEX idx_documents_journey ON documents(journey_id)')

    op.execute('''
        CREATE TABLE medical_records (
            id UUID PRIMARY KEY DEFAULT gen_random_uuid(),
            surrogate_id UUID NOT NULL REFERENCES users(id) ON DELETE CASCADE,
            record_type VARCHAR(30) NOT NULL,
            title VARCHAR(255) NOT NULL,
            record_date DATE NOT NULL,
            provider VARCHAR(255),
            status VARCHAR(20) NOT NULL DEFAULT 'Pending',
            notes TEXT,
            file_url TEXT,
            created_at TIMESTAMPTZ NOT NULL DEFAULT now(),
            updated_at TIMESTAMPTZ NOT NULL DEFAULT now()
        )
    ''')
    op.execute(
        'CREATE INDEX idx_medical_records_surrogate_date '
        'ON medical_records(surrogate_id, record_date)'
    )

    op.execute('''
        CREATE TABLE medications (
            id UUID PRIMARY KEY DEFAULT gen_random_uuid(),
            surrogate_id UUID NOT NULL REFERENCES users(id) ON DELETE CASCADE,
            name VARCHAR(255) NOT NULL,
            dosage VARCHAR(100),
            frequency VARCHAR(100),
            start_date DATE,
            end_date DATE,
            prescribed_by VARCHAR(255),
            status VARCHAR(20) NOT NULL DEFAULT 'Active',
            notes TEXT,
            created_at TIMESTAMPTZ NOT NULL DEFAULT now(),
            updated_at TIMESTAMPTZ NOT NULL DEFAULT now()
        )
    ''')
    op.execute('CREATE INDEX idx_medications_surrogate_start ON medications(surrogate_id, start_date)')

    # ==========================================================================
    # Contracts and baby watch
    # ==========================================================================
    op.execute('''
        CREATE TABLE contracts (
            id UUID PRIMARY KEY DEFAULT gen_random_uuid(),
            title VARCHAR(255),
            contract_type VARCHAR(50),
            parent_id UUID REFERENCES users(id) ON DELETE SET NULL,
            surrogate_id UUID REFERENCES users(id) ON DELETE SET NULL,
            journey_id UUID REFERENCES journeys(id) ON DELETE SET NULL,
            parent_name VARCHAR(255),
            surrogate_name VARCHAR(255),
            status VARCHAR(20) NOT NULL DEFAULT 'draft',
            value NUMERIC(12, 2),
            start_date DATE,
            end_date DATE,
            document_url TEXT,
            notes TEXT,
            created_at TIMESTAMPTZ NOT NULL DEFAULT now(),
            updated_at TIMESTAMPTZ NOT NULL DEFAULT now()
        )
    ''')
    op.execute('CREATE INDEX idx_contracts_status_created ON contracts(status, created_at)')

    op.execute('''
        CREATE TABLE baby_watch_updates (
            id UUID PRIMARY KEY DEFAULT gen_random_uuid(),
            journey_id UUID NOT NULL REFERENCES journeys(id) ON DELETE CASCADE,
            update_date DATE NOT NULL,
            gestational_age_weeks INTEGER,
            weight VARCHAR(50),
            heart_rate INTEGER,
            medical_notes TEXT,
            shared_with_parents BOOLEAN NOT NULL DEFAULT false,
            image_path TEXT,
            image_url TEXT,
            created_at TIMESTAMPTZ NOT NULL DEFAULT now(),
            updated_at TIMESTAMPTZ NOT NULL DEFAULT now()
        )
    ''')
    op.execute(
        'CREATE INDEX idx_baby_watch_journey_date ON baby_watch_updates(journey_id, update_date)'
    )


def downgrade() -> None:
    """Drop the admin schema."""
    for table in TABLES_IN_DROP_ORDER:
        op.execute(f'DROP TABLE IF EXISTS {table} CASCADE')
