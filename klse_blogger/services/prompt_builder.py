import os
from jinja2 import Environment, FileSystemLoader, StrictUndefined

PROMPT_DIR = os.path.join(os.path.dirname(__file__), "prompts")

env = Environment(
    loader=FileSystemLoader(PROMPT_DIR),
    undefined=StrictUndefined,
    trim_blocks=True,
    lstrip_blocks=True,
    keep_trailing_newline=True,
)

# Section name -> one-line description of what the report covers there.
REPORT_SECTIONS = [
    ("介绍公司", ""),
    ("财务表现概览", "宏观层面展现了公司整体的收入、利润增长情况，为读者提供一个整体印象。"),
    ("业务部门表现", "详细分析了各个业务部门的业绩，有助于了解各部门对整体表现的贡献和影响。"),
    ("财务状况", "深入探讨资产负债表、现金流量等财务指标，评估公司的财务健康状况。"),
    ("风险与前景", "分析了市场前景、潜在风险以及公司采取的策略。"),
    ("股息", "宣布股息派发，体现了公司对股东的回馈。"),
    ("总结", "简要总结了报告的要点，并展望未来发展。"),
]

KEY_METRICS = ["营收", "税前盈利", "净利", "每股盈利"]

TARGET_AUDIENCE = "马来西亚散户投资者"


def render_prompt(template_name: str, **kwargs) -> str:
    template = env.get_template(template_name)
    return template.render(**kwargs)


def build_klse_report_prompt() -> str:
    """Fixed instructions sent alongside every uploaded quarterly report."""
    return render_prompt(
        "analyze_klse_report.j2",
        report_sections=REPORT_SECTIONS,
        key_metrics=KEY_METRICS,
        target_audience=TARGET_AUDIENCE,
    )
