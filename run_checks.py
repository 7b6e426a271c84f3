from fastapi.testclient import TestClient
from nagrik_seva.main import app

client = TestClient(app)

print('ROOT:')
print(client.get('/').json())

print('\nHEALTH:')
print(client.get('/health').json())

print('\nISSUES:')
for issue in client.get('/api/issues').json():
    print(issue['id'], issue['status'], issue['daysUnresolved'], issue['description'])

print('\nANALYZE:')
print(client.post('/api/analyze', json={'text': 'Water leak on 5th cross'}).json())

print('\nAREA OVERVIEW:')
print(client.get('/api/area-overview').json())
