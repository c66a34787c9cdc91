"""
Test the in-memory design and template stores.

Tests:
1. Ownership checks on get/update/delete
2. Most recently updated designs are listed first
3. Stored parameters are normalized
4. Result slots: save / load
5. Templates: seed data, copy into a design, deactivate
"""

from web_frontend.backend.services.design_store import (
    SEED_TEMPLATES,
    DesignStatus,
    DesignStore,
    TemplateStore,
)


def test_ownership():
    store = DesignStore()
    design = store.create('alice', 'Spots', '2d_spot_projector')

    assert store.get(design.id, 'alice') is not None
    assert store.get(design.id, 'bob') is None
    assert store.update(design.id, 'bob', {'name': 'Hijacked'}) is None
    assert not store.delete(design.id, 'bob')
    assert store.get(design.id).name == 'Spots'
    assert store.list('bob') == []

    assert store.delete(design.id, 'alice')
    assert store.get(design.id) is None


def test_list_order():
    store = DesignStore()
    first = store.create('alice', 'First', 'diffuser')
    second = store.create('alice', 'Second', 'prism')
    assert [d.name for d in store.list('alice')] == ['Second', 'First']

    store.update(first.id, 'alice', {'name': 'First (edited)'})
    assert [d.id for d in store.list('alice')] == [first.id, second.id]


def test_parameters_normalized():
    store = DesignStore()
    design = store.create('alice', 'Far field', 'diffuser', {
        'mode': 'diffuser',
        'workingDistance': 'inf',
        'diffuserTargetType': 'size',
        'targetType': 'size',
    })
    assert design.parameters['diffuserTargetType'] == 'angle'
    assert design.parameters['targetType'] == 'angle'

    updated = store.update(design.id, 'alice', {
        'parameters': {'mode': 'diffuser', 'workingDistance': '100mm', 'diffuserTargetType': 'size'},
    })
    assert updated.parameters['diffuserTargetType'] == 'size'


def test_reads_are_copies():
    store = DesignStore()
    design = store.create('alice', 'Copy', 'lens', {'mode': 'lens'})
    fetched = store.get(design.id)
    fetched.parameters['lensFocalLength'] = '1mm'
    assert 'lensFocalLength' not in store.get(design.id).parameters


def test_save_and_load_slots():
    store = DesignStore()
    design = store.create('alice', 'Slots', '2d_spot_projector')

    assert store.load(design.id) == {
        'parameters': {'mode': '2d_spot_projector'},
        'previewSummary': None,
        'optimizationResult': None,
    }

    assert store.save(design.id, {'previewSummary': {'isValid': True}})
    assert store.save(design.id, {
        'optimizationResult': {'phaseMap': [[0]]},
        'status': 'optimized',
    })
    loaded = store.load(design.id)
    assert loaded['previewSummary'] == {'isValid': True}
    assert loaded['optimizationResult'] == {'phaseMap': [[0]]}
    assert store.get(design.id).status == DesignStatus.OPTIMIZED

    assert not store.save(9999, {'status': 'draft'})
    assert store.load(9999) is None


def test_templates():
    templates = TemplateStore()
    active = templates.list_active()
    assert len(active) == len(SEED_TEMPLATES)
    assert active[0].name == SEED_TEMPLATES[0]['name']

    store = DesignStore()
    design = store.create_from_template('alice', active[0])
    assert design.name == f"{active[0].name} Copy"
    assert design.mode == active[0].mode
    assert design.parameters == active[0].parameters
    assert design.status == DesignStatus.DRAFT

    templates.update(active[0].id, {'isActive': False})
    assert active[0].id not in [t.id for t in templates.list_active()]
    assert templates.get(active[0].id) is not None

    assert templates.delete(active[1].id)
    assert templates.get(active[1].id) is None
    assert TemplateStore(seed=False).list_active() == []


if __name__ == "__main__":
    test_ownership()
    test_list_order()
    test_parameters_normalized()
    test_reads_are_copies()
    test_save_and_load_slots()
    test_templates()
    print("All design store tests passed")
