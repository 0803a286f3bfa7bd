from flask import Flask, jsonify, request
import os
import datetime
import logging
from sqlalchemy import inspect
from dotenv import load_dotenv
from models import db, StatutoryHoliday
from pay_periods import (
    DEFAULT_NUMBER_OF_PERIODS,
    calculate_payroll_schedule,
    get_current_pay_period,
    get_upcoming_deadlines,
)
from payroll_errors import InvalidArgumentError, InvalidDateError
from date_utils import parse_date
from stat_holidays import DEFAULT_STATUTORY_HOLIDAYS, HolidayCalendar

base_dir = os.path.abspath(os.path.dirname(__file__))
load_dotenv(os.path.join(base_dir, '.env'), override=False)
app = Flask(__name__)


def _env_int(name: str, default: int) -> int:
    raw = (os.environ.get(name) or '').strip()
    if not raw:
        return default
    try:
        return int(raw)
    except ValueError:
        return default


def _env_log_level(name: str, default: str = 'INFO') -> str:
    level = (os.environ.get(name) or '').strip().upper()
    if level and isinstance(logging.getLevelName(level), int):
        return level
    return default


def _get_database_uri() -> str:
    """Resolve DB connection string.

    - DATABASE_URL when set (postgres:// is normalized to postgresql:// for SQLAlchemy)
    - Local dev fallback: SQLite file in project directory
    """
    uri = (os.environ.get('DATABASE_URL') or '').strip()
    if uri:
        if uri.startswith('postgres://'):
            uri = 'postgresql://' + uri[len('postgres://'):]
        return uri
    return 'sqlite:///' + os.path.join(base_dir, 'payroll_calendar.db')


app.config['SQLALCHEMY_DATABASE_URI'] = _get_database_uri()
app.config['SQLALCHEMY_TRACK_MODIFICATIONS'] = False
app.config['DEFAULT_NUMBER_OF_PERIODS'] = _env_int('DEFAULT_NUMBER_OF_PERIODS', DEFAULT_NUMBER_OF_PERIODS)
app.config['UPCOMING_DEADLINE_DAYS'] = _env_int('UPCOMING_DEADLINE_DAYS', 60)

# Managed Postgres drops idle connections.
if not app.config['SQLALCHEMY_DATABASE_URI'].startswith('sqlite'):
    app.config['SQLALCHEMY_ENGINE_OPTIONS'] = {
        'pool_pre_ping': True,
        'pool_recycle': 280,
    }

app.logger.setLevel(_env_log_level('LOG_LEVEL'))

db.init_app(app)


def _seed_statutory_holidays() -> int:
    """Insert the default holiday table. Returns rows added."""
    for (month, day), name in DEFAULT_STATUTORY_HOLIDAYS.items():
        db.session.add(StatutoryHoliday(month=month, day=day, name=name))
    db.session.commit()
    return len(DEFAULT_STATUTORY_HOLIDAYS)


with app.app_context():
    # Seed only a freshly created table; an emptied table means "no holidays".
    holiday_table_exists = StatutoryHoliday.__table__.name in inspect(db.engine).get_table_names()
    db.create_all()
    app.logger.info('DB dialect: %s', getattr(db.engine.dialect, 'name', 'unknown'))
    if not holiday_table_exists:
        try:
            added = _seed_statutory_holidays()
            app.logger.info('Seeded %d statutory holidays', added)
        except Exception:
            db.session.rollback()
            app.logger.exception('Could not seed statutory holidays')


@app.after_request
def _no_cache_api_responses(response):
    """API results depend on today's date; never let them be cached."""
    if request.path.startswith('/api/'):
        response.headers['Cache-Control'] = 'no-store, max-age=0'
        response.headers['Pragma'] = 'no-cache'
    return response


def _today() -> datetime.date:
    return datetime.date.today()


def _holiday_calendar() -> HolidayCalendar:
    rows = StatutoryHoliday.query.all()
    return HolidayCalendar({(r.month, r.day): r.name for r in rows})


def _error(message: str, status: int):
    return jsonify({'success': False, 'message': message}), status


def _period_payload(period, calendar: HolidayCalendar) -> dict:
    data = period.to_dict()
    data['adjustedPaymentDate'] = calendar.adjust_payment_date(period.payment_date).isoformat()
    return data


@app.route('/api/payroll/calculate', methods=['POST'])
def payroll_calculate():
    payload = request.get_json(silent=True)
    if not isinstance(payload, dict):
        payload = {}
    contract_start_date = payload.get('contractStartDate')
    number_of_periods = payload.get('numberOfPeriods')
    if number_of_periods is None:
        number_of_periods = app.config['DEFAULT_NUMBER_OF_PERIODS']

    app.logger.info(
        'Payroll calculation request: contractStartDate=%s numberOfPeriods=%s',
        contract_start_date,
        number_of_periods,
    )

    if not contract_start_date or not isinstance(contract_start_date, str):
        return _error('Contract start date is required', 400)

    # Only request input errors map to 400; holiday table faults are server errors.
    try:
        schedule = calculate_payroll_schedule(contract_start_date, number_of_periods)
    except InvalidDateError:
        return _error('Invalid date format', 400)
    except InvalidArgumentError as exc:
        return _error(exc.message, 400)
    except Exception:
        app.logger.exception('Payroll calculation error')
        return _error('Internal server error', 500)

    try:
        today = _today()
        current_period = get_current_pay_period(schedule, today=today)
        upcoming = get_upcoming_deadlines(schedule, app.config['UPCOMING_DEADLINE_DAYS'], today=today)
        calendar = _holiday_calendar()

        schedule_data = schedule.to_dict()
        schedule_data['periods'] = [_period_payload(p, calendar) for p in schedule.periods]
        data = {
            'schedule': schedule_data,
            'currentPeriod': _period_payload(current_period, calendar) if current_period else None,
            'upcomingDeadlines': [_period_payload(p, calendar) for p in upcoming],
            'summary': {
                'totalPeriods': len(schedule.periods),
                'contractStartDate': schedule.contract_start_date.isoformat(),
                'firstPeriodEnd': schedule.first_period_end.isoformat(),
                'hasPartialFirstPeriod': schedule.has_partial_first_period,
            },
        }
    except Exception:
        app.logger.exception('Payroll calculation error')
        return _error('Internal server error', 500)

    app.logger.info('Payroll schedule calculated: %d periods', len(schedule.periods))
    return jsonify({'success': True, 'data': data})


@app.route('/api/payroll/holidays', methods=['GET'])
def payroll_holidays():
    try:
        rows = StatutoryHoliday.query.order_by(StatutoryHoliday.month, StatutoryHoliday.day).all()
    except Exception:
        app.logger.exception('Could not load holiday table')
        return _error('Internal server error', 500)
    return jsonify({'success': True, 'data': [r.to_dict() for r in rows]})


@app.route('/api/payroll/payment-date', methods=['GET'])
def payroll_payment_date():
    raw = request.args.get('date')
    if not raw:
        return _error('date is required', 400)
    try:
        value = parse_date(raw)
    except InvalidDateError:
        return _error('Invalid date format', 400)

    try:
        calendar = _holiday_calendar()
        adjusted = calendar.adjust_payment_date(value)
    except Exception:
        app.logger.exception('Payment date adjustment error')
        return _error('Internal server error', 500)

    return jsonify({
        'success': True,
        'data': {
            'date': value.isoformat(),
            'adjustedDate': adjusted.isoformat(),
            'isStatutoryHoliday': calendar.is_holiday(value),
            'holidayName': calendar.holiday_name(value),
        },
    })


if __name__ == '__main__':
    app.run(debug=(os.environ.get('FLASK_DEBUG') or '').strip().lower() in {'1', 'true', 'yes', 'on'})
