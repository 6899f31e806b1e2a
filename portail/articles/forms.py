"""Forms for the articles admin."""

from flask_wtf import FlaskForm
from wtforms import StringField, TextAreaField
from wtforms.validators import DataRequired, Length, Optional


class ArticleForm(FlaskForm):
    """Write an article, optionally with a poll (one answer per line)."""

    title = StringField("Title", validators=[DataRequired(), Length(max=200)])
    excerpt = StringField("Excerpt", validators=[Optional(), Length(max=300)])
    author = StringField("Author", validators=[Optional(), Length(max=80)])
    content = TextAreaField("Content", validators=[DataRequired()])
    poll_question = StringField("Poll question", validators=[Optional(), Length(max=200)])
    poll_options = TextAreaField("Poll answers", validators=[Optional()])

    def option_lines(self):
        return (self.poll_options.data or "").splitlines()
