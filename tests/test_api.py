"""
Test the FastAPI backend end to end.

Tests:
1. Health, presets, preview, hints and validation endpoints
2. Design CRUD with ownership
3. Templates: public reads, admin-only writes, copy into a design
4. Optimize / poll / cancel with single-flight
5. Export of the stored result
6. Custom pattern preprocessing
7. Shutdown cancels and joins running optimizations
"""

import time

from fastapi.testclient import TestClient

from doe_studio.optimizer import MockOptimizer

import web_frontend.backend.app as app_module
from web_frontend.backend.app import app
from web_frontend.backend.services.design_store import DesignStore
from web_frontend.backend.services.task_manager import TaskManager, TaskStatus, task_manager


client = TestClient(app)

USER = {'X-User-Id': 'user-1'}
OTHER = {'X-User-Id': 'user-2'}
ADMIN = {'X-User-Id': 'admin-1', 'X-User-Role': 'admin'}

task_manager.optimizer = MockOptimizer(seed=7, duration_seconds=0.05, steps=5)


def create_design(name='API design', mode='2d_spot_projector', parameters=None, headers=USER):
    response = client.post('/api/designs', json={
        'name': name,
        'mode': mode,
        'parameters': parameters if parameters is not None else {'mode': mode},
    }, headers=headers)
    assert response.status_code == 201, response.text
    return response.json()


def poll_task(task_id, headers=USER, timeout=10.0):
    deadline = time.time() + timeout
    while True:
        data = client.get(f'/api/tasks/{task_id}', headers=headers).json()
        if data['status'] not in ('pending', 'running'):
            return data
        if time.time() > deadline:
            raise AssertionError(f"task {task_id} did not finish: {data}")
        time.sleep(0.02)


def test_health():
    response = client.get('/health')
    assert response.status_code == 200
    assert response.json()['status'] == 'healthy'


def test_presets():
    data = client.get('/api/presets').json()
    assert set(data) == {'distances', 'wavelengths', 'diameters', 'fabricationRecipes'}
    assert {'value': 'inf', 'label': '∞ (Infinity)'} in data['distances']


def test_preview_endpoint():
    response = client.post('/api/preview', json={'parameters': {
        'mode': '2d_spot_projector', 'arrayRows': '50', 'arrayCols': '50',
        'targetAngle': '30deg', 'tolerance': '1',
    }})
    assert response.status_code == 200
    data = response.json()
    assert data['isValid'] is True
    assert data['summary']['totalSpots'] == 2500
    assert data['summary']['fullAngle'] == "30.00°"

    bad = client.post('/api/preview', json={'parameters': {'wavelength': 'green'}}).json()
    assert bad['invalidFields'] == ['wavelength']

    assert client.post('/api/preview', json={'parameters': {'mode': 'hologram'}}).status_code == 422


def test_hints_and_validate():
    hints = client.post('/api/hints', json={'parameters': {'mode': '2d_spot_projector'}}).json()
    assert hints['maxArraySize'] == "3000×3000"

    result = client.post('/api/validate', json={'parameters': {'mode': 'lens', 'lensFocalLength': 'x'}}).json()
    assert result['is_valid'] is False
    assert result['errors'][0]['field'] == 'lensFocalLength'


def test_request_validation_error():
    response = client.post('/api/preview', json={'parameters': 'not a dict'})
    assert response.status_code == 422
    assert 'detail' in response.json()


def test_designs_require_user():
    assert client.get('/api/designs').status_code == 401
    assert client.post('/api/designs', json={'name': 'x', 'mode': 'lens'}).status_code == 401


def test_design_crud():
    design = create_design(parameters={
        'mode': 'diffuser', 'workingDistance': 'inf', 'diffuserTargetType': 'size',
    }, mode='diffuser')
    design_id = design['id']
    assert design['status'] == 'draft'
    assert design['parameters']['diffuserTargetType'] == 'angle'

    assert client.get(f'/api/designs/{design_id}', headers=OTHER).status_code == 404
    assert design_id in [d['id'] for d in client.get('/api/designs', headers=USER).json()]
    assert design_id not in [d['id'] for d in client.get('/api/designs', headers=OTHER).json()]

    response = client.patch(f'/api/designs/{design_id}', json={'name': 'Renamed'}, headers=USER)
    assert response.status_code == 200
    assert response.json()['name'] == 'Renamed'
    assert response.json()['parameters']['mode'] == 'diffuser'

    assert client.patch(f'/api/designs/{design_id}', json={'mode': 'hologram'},
                        headers=USER).status_code == 422

    preview = client.post(f'/api/designs/{design_id}/preview', headers=USER).json()
    assert preview['summary']['doeMode'] == 'diffuser'
    assert client.get(f'/api/designs/{design_id}', headers=USER).json()['previewData'] == preview

    assert client.delete(f'/api/designs/{design_id}', headers=OTHER).status_code == 404
    assert client.delete(f'/api/designs/{design_id}', headers=USER).json() == {'success': True}
    assert client.get(f'/api/designs/{design_id}', headers=USER).status_code == 404


def test_create_design_unknown_mode():
    response = client.post('/api/designs', json={'name': 'x', 'mode': 'hologram'}, headers=USER)
    assert response.status_code == 422


def test_templates():
    templates = client.get('/api/templates').json()
    assert len(templates) > 0
    first = templates[0]

    response = client.post('/api/designs/from-template', json={'templateId': first['id']}, headers=USER)
    assert response.status_code == 201
    design = response.json()
    assert design['name'] == f"{first['name']} Copy"
    assert design['mode'] == first['mode']

    assert client.post('/api/designs/from-template', json={'templateId': 99999},
                       headers=USER).status_code == 404

    payload = {'name': 'Admin template', 'mode': 'prism', 'parameters': {'prismDeflectionAngle': '3deg'}}
    assert client.post('/api/templates', json=payload, headers=USER).status_code == 403
    response = client.post('/api/templates', json=payload, headers=ADMIN)
    assert response.status_code == 201
    template_id = response.json()['id']

    response = client.patch(f'/api/templates/{template_id}', json={'isActive': False}, headers=ADMIN)
    assert response.json()['isActive'] is False
    assert template_id not in [t['id'] for t in client.get('/api/templates').json()]

    assert client.delete(f'/api/templates/{template_id}', headers=USER).status_code == 403
    assert client.delete(f'/api/templates/{template_id}', headers=ADMIN).status_code == 200
    assert client.get(f'/api/templates/{template_id}').status_code == 404


def test_optimize_and_export():
    design = create_design(name='Optimize me')
    design_id = design['id']

    assert client.post(f'/api/designs/{design_id}/export', json={}, headers=USER).status_code == 400

    response = client.post(f'/api/designs/{design_id}/optimize', headers=USER)
    assert response.status_code == 202, response.text
    task_id = response.json()['task_id']

    assert client.get(f'/api/tasks/{task_id}', headers=OTHER).status_code == 404
    final = poll_task(task_id)
    assert final['status'] == 'completed', final

    stored = client.get(f'/api/designs/{design_id}', headers=USER).json()
    assert stored['status'] == 'optimized'
    assert stored['previewData']['summary']['totalSpots'] == 2500
    assert len(stored['optimizationResult']['orderEnergies']) == 11

    csv = client.post(f'/api/designs/{design_id}/export',
                      json={'format': 'csv', 'data_type': 'phase'}, headers=USER)
    assert csv.status_code == 200
    assert csv.headers['content-type'].startswith('text/csv')
    assert len(csv.text.strip().splitlines()) == 256

    data = client.post(f'/api/designs/{design_id}/export',
                       json={'format': 'json', 'data_type': 'actual'}, headers=USER).json()
    assert data['shape'] == [50, 50]

    npy = client.post(f'/api/designs/{design_id}/export',
                      json={'format': 'npy', 'data_type': 'target'}, headers=USER).json()
    assert npy['success'] is True
    assert npy['filename'] == 'doe_target_intensity.npy'


def test_optimize_single_flight_and_cancel():
    design_id = create_design(name='Busy')['id']
    previous = task_manager.optimizer
    task_manager.optimizer = MockOptimizer(seed=7, duration_seconds=30, steps=30)
    try:
        first = client.post(f'/api/designs/{design_id}/optimize', headers=USER)
        assert first.status_code == 202
        task_id = first.json()['task_id']

        second = client.post(f'/api/designs/{design_id}/optimize', headers=USER)
        assert second.status_code == 409
        assert second.json()['task_id'] == task_id
        assert second.json()['retryable'] is True

        assert client.post(f'/api/tasks/{task_id}/cancel', headers=OTHER).status_code == 404
        assert client.post(f'/api/tasks/{task_id}/cancel', headers=USER).json()['success'] is True
        final = poll_task(task_id)
        assert final['status'] == 'cancelled'
        assert final['retryable'] is True
    finally:
        task_manager.optimizer = previous

    design = client.get(f'/api/designs/{design_id}', headers=USER).json()
    assert design['status'] == 'draft'
    assert design['optimizationResult'] is None


def test_pattern_preview():
    response = client.post('/api/patterns/preview', json={'preset': 'cross'})
    assert response.status_code == 200
    data = response.json()
    assert data['customPatternInfo']['width'] == 256
    assert data['customPatternPreview'].startswith('data:image/png;base64,')

    assert client.post('/api/patterns/preview', json={}).status_code == 422



def test_shutdown_stops_running_tasks():
    store = DesignStore()
    manager = TaskManager(
        store=store,
        optimizer=MockOptimizer(seed=7, duration_seconds=30, steps=30),
        max_concurrent=1,
        timeout_seconds=60,
    )
    design = store.create('user-1', 'Shutdown', '2d_spot_projector', {'mode': '2d_spot_projector'})
    original = app_module.task_manager
    app_module.task_manager = manager
    try:
        with TestClient(app):
            task = manager.submit(design)
        # Leaving the client runs the shutdown hook, which joins the workers
        assert task.is_finished
        assert task.status == TaskStatus.CANCELLED
        assert manager.active_task(design.id) is None
    finally:
        app_module.task_manager = original


if __name__ == "__main__":
    test_health()
    test_presets()
    test_preview_endpoint()
    test_hints_and_validate()
    test_request_validation_error()
    test_designs_require_user()
    test_design_crud()
    test_create_design_unknown_mode()
    test_templates()
    test_optimize_and_export()
    test_optimize_single_flight_and_cancel()
    test_pattern_preview()
    test_shutdown_stops_running_tasks()
    print("All API tests passed")
