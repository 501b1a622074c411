"""Admin dashboard charts, rendered server-side to embeddable HTML"""

import plotly.graph_objects as go

BAR_COLOR = '#ef4444'
LINE_COLOR = '#6b7280'
GRID_COLOR = '#e5e7eb'


def _layout(fig, y_title):
    fig.update_layout(
        height=300,
        margin=dict(l=40, r=10, t=10, b=40),
        plot_bgcolor='#ffffff',
        paper_bgcolor='#ffffff',
        font=dict(size=11),
        showlegend=True,
        legend=dict(orientation='h', y=-0.2),
        yaxis=dict(title=y_title, gridcolor=GRID_COLOR, griddash='dash'),
        xaxis=dict(gridcolor=GRID_COLOR, griddash='dash'),
    )
    return fig


def monthly_submissions_figure(stats):
    months = [m.month for m in stats.monthly_stats]
    fig = go.Figure(go.Bar(
        x=months,
        y=[m.submissions for m in stats.monthly_stats],
        name='submissions',
        marker_color=BAR_COLOR,
    ))
    return _layout(fig, 'Submissions')


def average_score_figure(stats):
    months = [m.month for m in stats.monthly_stats]
    fig = go.Figure(go.Scatter(
        x=months,
        y=[m.average_score for m in stats.monthly_stats],
        name='average_score',
        mode='lines+markers',
        line=dict(color=LINE_COLOR, width=2, shape='spline'),
    ))
    return _layout(fig, 'Average score (%)')


def to_html(fig, div_id):
    """Chart fragment; plotly.js itself is loaded once by the page"""
    return fig.to_html(full_html=False, include_plotlyjs=False, div_id=div_id,
                       config={'displayModeBar': False, 'responsive': True})


def dashboard_charts(stats):
    return {
        'submissions_chart': to_html(monthly_submissions_figure(stats), 'monthly-submissions'),
        'scores_chart': to_html(average_score_figure(stats), 'average-scores'),
    }
