from formbuilder.catalog import categories, get_template, list_templates, templates_by_category


def test_catalog_lookup():
    assert len(list_templates()) == 5
    template = get_template("job-application")
    assert template is not None
    assert [item.order for item in template.fields] == list(range(8))
    assert get_template("missing") is None


def test_categories_keep_first_seen_order():
    assert categories() == ["Business", "Research", "Events"]
    assert [t.id for t in templates_by_category("Business")] == [
        "contact-form",
        "job-application",
        "feedback-form",
    ]


def test_to_dict_omits_missing_options():
    data = get_template("contact-form").to_dict()
    assert "options" not in data["fields"][0]
    assert data["fields"][3]["options"][-1] == "Other"
