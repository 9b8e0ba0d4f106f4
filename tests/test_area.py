import io

from mwmud.editor.area import Area, AreaWidget
from mwmud.editor.campaign import Campaign
from mwmud.editor.refidtree import GroupNode, ItemNode, RefIdTree


def _open_campaign(tmp_path):
    campaign = Campaign(tmp_path, out=io.StringIO())
    campaign.set_properties("demo", "Demo", "Someone", "A test")
    campaign.create()
    campaign.open("demo")
    return campaign


def test_area_holds_id_and_name():
    area = Area("a1", "Harbor")
    assert (area.id, area.name) == ("a1", "Harbor")
    assert Area("a1", "Harbor") == area


def test_widget_without_loaded_campaign_has_empty_tree(tmp_path):
    widget = AreaWidget(Campaign(tmp_path, out=io.StringIO()))
    assert widget.tree_path is None
    assert widget.tree_view.root.child_groups == []
    assert widget.tree_view.root.child_items == []


def test_widget_without_saved_tree_keeps_default(tmp_path):
    campaign = _open_campaign(tmp_path)
    widget = AreaWidget(campaign)
    assert widget.tree_path == tmp_path / "demo" / AreaWidget.AREAS_REFIDTREE_PATH
    assert widget.tree_view.root.child_items == []


def test_widget_loads_saved_tree(tmp_path):
    campaign = _open_campaign(tmp_path)
    root = GroupNode("Areas")
    root.add_node(ItemNode("harbor"))
    saved = RefIdTree(root)
    saved.save(tmp_path / "demo" / AreaWidget.AREAS_REFIDTREE_PATH)

    widget = AreaWidget(campaign)
    assert widget.tree_view == saved