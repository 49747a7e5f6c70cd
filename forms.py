from flask_wtf import FlaskForm
from wtforms import IntegerField
from wtforms.validators import NumberRange, Optional

from config import PAGINATOR_DEFAULT_PAGE, PAGINATOR_DEFAULT_SIZE


class PaginatorForm(FlaskForm):
    """Binds ``page`` and ``size`` from the query string of a listing request."""

    class Meta:
        # Bound from GET parameters, nothing to protect
        csrf = False

    page = IntegerField(
        "Page", default=PAGINATOR_DEFAULT_PAGE, validators=[Optional(), NumberRange(min=1)]
    )
    size = IntegerField(
        "Page Size", default=PAGINATOR_DEFAULT_SIZE, validators=[Optional(), NumberRange(min=1)]
    )

    @classmethod
    def from_request(cls, request):
        """Bind the form to the request's query string."""
        return cls(formdata=request.args)

    @staticmethod
    def filter_request(request, default=None):
        """
        Return the raw page and size values of a request.

        Args:
            request: Flask request (query string and form values are both read)
            default: Optional overrides for the defaults ({'page': 1, 'size': 20})

        Returns:
            Dict with 'page' and 'size'
        """
        defaults = {
            'page': PAGINATOR_DEFAULT_PAGE,
            'size': PAGINATOR_DEFAULT_SIZE,
        }
        defaults.update(default or {})

        return {
            'page': request.values.get('page', defaults['page']),
            'size': request.values.get('size', defaults['size']),
        }
