"""initial tables: timetable, homework, duty

Revision ID: 0001
Revises: 
Create Date: 2026-02-04

"""
from alembic import op
import sqlalchemy as sa

# revision identifiers, used by Alembic.
revision = '0001'
down_revision = None
branch_labels = None
depends_on = None

def upgrade():
    weekday = sa.Enum('MONDAY', 'TUESDAY', 'WEDNESDAY', 'THURSDAY', 'FRIDAY', name='weekday')

    bind = op.get_bind()
    if bind.dialect.name != "sqlite":
        weekday.create(bind, checkfirst=True)

    op.create_table('timetable_slots',
        sa.Column('id', sa.Integer(), primary_key=True),
        sa.Column('day', weekday, nullable=False),
        sa.Column('lesson_number', sa.Integer(), nullable=False),
        sa.Column('subject', sa.Text(), nullable=False),
        sa.Column('created_at', sa.DateTime(), nullable=False),
        sa.UniqueConstraint('day', 'lesson_number', name='uq_timetable_day_lesson'),
    )

    op.create_table('homeworks',
        sa.Column('id', sa.Integer(), primary_key=True),
        sa.Column('subject', sa.Text(), nullable=False),
        sa.Column('title', sa.Text(), nullable=False),
        sa.Column('date', sa.Date(), nullable=False),
        sa.Column('image', sa.Text(), nullable=True),
        sa.Column('images', sa.JSON(), nullable=True),
        sa.Column('created_at', sa.DateTime(), nullable=False),
    )
    op.create_index('ix_homeworks_date', 'homeworks', ['date'])
    op.create_index('ix_homeworks_subject', 'homeworks', ['subject'])

    op.create_table('duty_schedules',
        sa.Column('id', sa.Integer(), primary_key=True),
        sa.Column('date', sa.Date(), nullable=False),
        sa.Column('names', sa.JSON(), nullable=False),
        sa.Column('notes', sa.Text(), nullable=True),
        sa.Column('created_at', sa.DateTime(), nullable=False),
        sa.Column('updated_at', sa.DateTime(), nullable=False),
    )
    op.create_index('ix_duty_schedules_date', 'duty_schedules', ['date'], unique=True)

def downgrade():
    op.drop_index('ix_duty_schedules_date', table_name='duty_schedules')
    op.drop_table('duty_schedules')
    op.drop_index('ix_homeworks_subject', table_name='homeworks')
    op.drop_index('ix_homeworks_date', table_name='homeworks')
    op.drop_table('homeworks')
    op.drop_table('timetable_slots')

    bind = op.get_bind()
    if bind.dialect.name != "sqlite":
        sa.Enum(name='weekday').drop(bind, checkfirst=True)
