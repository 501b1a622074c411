from flask import Blueprint, render_template, request, current_app, url_for
from pydantic import ValidationError

from quizportal.api import ApiError, get_api
from quizportal.charts import dashboard_charts
from quizportal.decorators import admin_required
from quizportal.forms import CreateQuizForm, UploadAssignmentForm, REQUIRED_FIELDS_MESSAGE, DATETIME_LOCAL_FORMAT
from quizportal.models import StudentSummary, SystemStats, StudentDetails
from quizportal.utils import banner_error, file_size

admin_bp = Blueprint('admin', __name__)


# ==================== Helper functions ====================
def load_dashboard_data():
    """Roster + system stats; a failed call leaves that part empty"""
    api = get_api()
    students = []
    stats = SystemStats()
    try:
        students = [StudentSummary.model_validate(s) for s in (api.admin_students() or [])]
    except (ApiError, ValidationError, TypeError) as e:
        current_app.logger.error(f'Error fetching students: {e}')
    try:
        stats = SystemStats.model_validate(api.system_stats() or {})
    except (ApiError, ValidationError) as e:
        current_app.logger.error(f'Error fetching system stats: {e}')
    return students, stats


def render_dashboard(selected_student=None, alert=None):
    students, stats = load_dashboard_data()
    search = request.args.get('q', '').strip()
    filtered = [s for s in students if s.matches(search)] if search else students

    return render_template('admin/dashboard.html',
                           stats=stats,
                           students=filtered,
                           search=search,
                           selected_student=selected_student,
                           alert=alert,
                           **dashboard_charts(stats))


# ==================== DASHBOARD ====================
@admin_bp.route('/dashboard')
@admin_required
def dashboard():
    """Stats, monthly charts and the searchable roster"""
    return render_dashboard()


@admin_bp.route('/students/<int:student_id>')
@admin_required
def student_details(student_id):
    """Dashboard with the student details dialog open"""
    try:
        details = StudentDetails.model_validate(get_api().student_details(student_id))
    except (ApiError, ValidationError) as e:
        current_app.logger.error(f'Error fetching student details for {student_id}: {e}')
        return render_dashboard(alert={'type': 'error', 'message': 'Could not load student details.'})
    return render_dashboard(selected_student=details)


# ==================== CREATE QUIZ ====================
def rebuild_quiz_form(form, action):
    """Apply an add/remove question action, returns a fresh unvalidated form"""
    data = form.builder_data()
    questions = data['questions']

    if action == 'add_question':
        questions.append({'type': 'mcq'})
    elif action.startswith('remove-'):
        try:
            index = int(action.split('-', 1)[1])
        except ValueError:
            index = -1
        if len(questions) > 1 and 0 <= index < len(questions):
            del questions[index]

    return CreateQuizForm(formdata=None, data=data)


@admin_bp.route('/create-quiz', methods=['GET', 'POST'])
@admin_required
def create_quiz():
    """Quiz builder"""
    form = CreateQuizForm()
    alert = None

    if form.is_submitted():
        action = request.form.get('action', '')
        if action and action != 'submit':
            form = rebuild_quiz_form(form, action)
            return render_template('admin/create_quiz.html', form=form, alert=None)

        if form.validate():
            try:
                get_api().create_quiz(form.to_payload())
            except ApiError as e:
                alert = {'type': 'error', 'message': e.message}
            else:
                current_app.logger.info(f'Quiz created: {form.title.data}')
                return render_template('admin/create_quiz.html', form=form,
                                       alert={'type': 'success',
                                              'message': 'Quiz created successfully!'},
                                       redirect_url=url_for('admin.dashboard'),
                                       redirect_delay=current_app.config['SUCCESS_REDIRECT_DELAY'])

    return render_template('admin/create_quiz.html', form=form, alert=alert)


# ==================== UPLOAD ASSIGNMENT ====================
@admin_bp.route('/upload-assignment', methods=['GET', 'POST'])
@admin_required
def upload_assignment():
    """Assignment metadata + file, forwarded as multipart"""
    form = UploadAssignmentForm()
    alert = None
    selected_file = None

    if form.is_submitted():
        upload = form.file.data
        if upload and getattr(upload, 'filename', None):
            selected_file = {'name': upload.filename, 'size': file_size(upload)}

        if not form.validate():
            alert = {'type': 'error', 'message': banner_error(form, REQUIRED_FIELDS_MESSAGE)}
        else:
            try:
                data = get_api().upload_assignment(
                    title=form.title.data,
                    description=form.description.data,
                    due_date=form.due_date.data.strftime(DATETIME_LOCAL_FORMAT),
                    file=upload,
                )
            except ApiError as e:
                alert = {'type': 'error', 'message': e.message}
            else:
                data = data if isinstance(data, dict) else {}
                current_app.logger.info(f'Assignment uploaded: {form.title.data} ({upload.filename})')
                return render_template('admin/upload_assignment.html', form=form,
                                       selected_file=selected_file,
                                       alert={'type': 'success',
                                              'message': data.get('message') or 'Assignment uploaded successfully.'},
                                       redirect_url=url_for('admin.dashboard'),
                                       redirect_delay=current_app.config['SUCCESS_REDIRECT_DELAY'])

    return render_template('admin/upload_assignment.html', form=form, alert=alert,
                           selected_file=selected_file)
