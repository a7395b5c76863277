from klse_blogger.services.prompt_builder import KEY_METRICS, REPORT_SECTIONS, build_klse_report_prompt


class TestKLSEReportPrompt:

    def test_lists_every_report_section(self):
        prompt = build_klse_report_prompt()
        for section, _ in REPORT_SECTIONS:
            assert f"- {section}" in prompt

    def test_key_metrics(self):
        assert ",".join(KEY_METRICS) in build_klse_report_prompt()

    def test_target_audience(self):
        assert "马来西亚散户投资者" in build_klse_report_prompt()

    def test_required_css_classes(self):
        prompt = build_klse_report_prompt()
        for markup in ['<div class="highlight">', '<div class="comparison">', '<div class="comparison-item">',
                       '<span class="data-point">', '<div class="conclusion">']:
            assert markup in prompt

    def test_output_prohibitions(self):
        prompt = build_klse_report_prompt()
        assert "不能提出买卖建议/投资建议" in prompt
        assert "不要使用Markdown 格式" in prompt
        assert "```html" in prompt
        assert "<style>" in prompt

    def test_prompt_is_fixed(self):
        assert build_klse_report_prompt() == build_klse_report_prompt()
