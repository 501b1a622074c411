from flask_wtf import FlaskForm
from flask_wtf.file import FileField, FileAllowed, FileRequired
from wtforms import Form, StringField, TextAreaField, PasswordField, SelectField, RadioField, SubmitField
from wtforms.fields import DateTimeLocalField, FieldList, FormField
from wtforms.fields.numeric import IntegerField
from wtforms.validators import DataRequired, InputRequired, Length, NumberRange, Optional, Email

from quizportal.config import Config

REQUIRED_FIELDS_MESSAGE = 'Please fill in all required fields.'

DATETIME_LOCAL_FORMAT = '%Y-%m-%dT%H:%M'

PROFILE_PICTURE_TYPES = sorted(Config.PROFILE_PICTURE_EXTENSIONS)
ASSIGNMENT_FILE_TYPES = sorted(Config.ASSIGNMENT_EXTENSIONS)

QUESTION_TYPE_CHOICES = [
    ('mcq', 'Multiple Choice'),
    ('fill_in', 'Fill in the Blank'),
]
OPTIONS_PER_QUESTION = 4


def strip_filter(value):
    return value.strip() if isinstance(value, str) else value


# ==================== LOGIN ====================
class LoginForm(FlaskForm):
    """Username + PIN login"""
    username = StringField('Username', filters=[strip_filter], validators=[
        DataRequired(message='Please enter both username and PIN.')
    ])
    pin = PasswordField('PIN', filters=[strip_filter], validators=[
        DataRequired(message='Please enter both username and PIN.')
    ])
    submit = SubmitField('Log In')


# ==================== SIGNUP ====================
class SignupForm(FlaskForm):
    """Account creation with a mandatory profile picture"""
    email = StringField('Email', validators=[
        DataRequired(message=REQUIRED_FIELDS_MESSAGE),
        Email(message='Please enter a valid email address.')
    ])
    phone = StringField('Phone', validators=[
        DataRequired(message=REQUIRED_FIELDS_MESSAGE),
        Length(max=20)
    ])
    first_name = StringField('First Name', validators=[
        DataRequired(message=REQUIRED_FIELDS_MESSAGE),
        Length(max=100)
    ])
    last_name = StringField('Last Name', validators=[
        DataRequired(message=REQUIRED_FIELDS_MESSAGE),
        Length(max=100)
    ])
    # Declared before pin: a missing picture is reported before a short PIN
    profile_picture = FileField('Profile Picture', validators=[
        FileRequired(message='Please upload a profile picture.'),
        FileAllowed(PROFILE_PICTURE_TYPES, 'Profile picture must be an image.')
    ])
    pin = PasswordField('PIN', validators=[
        DataRequired(message=REQUIRED_FIELDS_MESSAGE),
        Length(min=4, message='PIN must be at least 4 characters.')
    ])
    submit = SubmitField('Sign Up')


# ==================== CREATE QUIZ ====================
class QuestionForm(Form):
    """One question of the quiz builder (sub-form, no CSRF of its own)"""
    text = TextAreaField('Question Text')
    type = SelectField('Question Type', choices=QUESTION_TYPE_CHOICES, default='mcq')
    options = FieldList(StringField('Option'), min_entries=OPTIONS_PER_QUESTION,
                        max_entries=OPTIONS_PER_QUESTION)
    correct_option = RadioField('Correct Option', coerce=int, validate_choice=False,
                                choices=[(i, f'Option {i + 1}') for i in range(OPTIONS_PER_QUESTION)],
                                validators=[Optional()])
    answer = StringField('Correct Answer')

    def correct_answers(self):
        if self.type.data == 'fill_in':
            answer = (self.answer.data or '').strip()
            return [answer] if answer else []
        index = self.correct_option.data
        if index is None or not 0 <= index < len(self.options.entries):
            return []
        return [self.options.entries[index].data or '']

    def to_payload(self):
        return {
            'text': self.text.data or '',
            'type': self.type.data,
            'options': [entry.data or '' for entry in self.options.entries],
            'correct_answers': self.correct_answers(),
        }


class CreateQuizForm(FlaskForm):
    """Quiz details plus a dynamic list of questions"""
    title = StringField('Quiz Title', filters=[strip_filter], validators=[
        DataRequired(message='Title is required')
    ])
    due_date = DateTimeLocalField('Due Date', format=DATETIME_LOCAL_FORMAT, validators=[
        DataRequired(message='Due date is required')
    ])
    duration = IntegerField('Duration (minutes)', validators=[
        InputRequired(message='Duration is required'),
        NumberRange(min=1, message='Duration must be at least 1 minute')
    ])
    questions = FieldList(FormField(QuestionForm), min_entries=1)
    submit = SubmitField('Create Quiz')

    def to_payload(self):
        """JSON body for /api/admin/create-quiz"""
        return {
            'title': self.title.data,
            'due_date': self.due_date.data.strftime(DATETIME_LOCAL_FORMAT),
            'duration': self.duration.data,
            'questions': [entry.form.to_payload() for entry in self.questions.entries],
        }

    def builder_data(self):
        """Current values as ``data=`` for a re-rendered builder"""
        return {
            'title': self.title.data,
            'due_date': self.due_date.data,
            'duration': self.duration.data,
            'questions': [
                {
                    'text': entry.form.text.data,
                    'type': entry.form.type.data,
                    'options': [option.data for option in entry.form.options.entries],
                    'correct_option': entry.form.correct_option.data,
                    'answer': entry.form.answer.data,
                }
                for entry in self.questions.entries
            ],
        }


# ==================== UPLOAD ASSIGNMENT ====================
class UploadAssignmentForm(FlaskForm):
    """Assignment metadata + one file"""
    title = StringField('Assignment Title', filters=[strip_filter], validators=[
        DataRequired(message=REQUIRED_FIELDS_MESSAGE),
        Length(max=200)
    ])
    description = TextAreaField('Description', filters=[strip_filter], validators=[
        DataRequired(message=REQUIRED_FIELDS_MESSAGE)
    ])
    due_date = DateTimeLocalField('Due Date & Time', format=DATETIME_LOCAL_FORMAT, validators=[
        DataRequired(message=REQUIRED_FIELDS_MESSAGE)
    ])
    file = FileField('Assignment File', validators=[
        FileRequired(message='Please select a file to upload.'),
        FileAllowed(ASSIGNMENT_FILE_TYPES, 'Supported file formats: PDF, DOC, DOCX, TXT, ZIP')
    ])
    submit = SubmitField('Upload Assignment')
