"""Tests for MongoUserRepository against a mocked pymongo collection."""

import unittest
from unittest.mock import MagicMock

from bson import ObjectId
from pymongo.errors import PyMongoError

from adapter.mongodb.connection import USERS_COLLECTION_NAME
from adapter.mongodb.user_repository import MongoUserRepository
from domain.model.errors import PersistenceError
from domain.model.user import Address, Geo, UserOrigin, UserRecord


def make_repo():
    mock_collection = MagicMock()
    mock_db = MagicMock()
    mock_db.__getitem__.return_value = mock_collection
    return MongoUserRepository(mock_db), mock_db, mock_collection


CAROL_DOC = {
    '_id': 'local-1',
    'name': 'Carol',
    'username': 'carol',
    'email': 'carol@example.com',
    'address': {'street': 'Main', 'suite': None, 'city': 'Oslo', 'zipcode': '0150',
                'geo': {'lat': '59.9', 'lng': '10.7'}},
    'active': True,
}


class TestMongoUserRepositoryReads(unittest.TestCase):

    def test_uses_users_collection(self):
        _, mock_db, _ = make_repo()
        mock_db.__getitem__.assert_called_with(USERS_COLLECTION_NAME)

    def test_find_all_converts_documents(self):
        repo, _, collection = make_repo()
        collection.find.return_value = [CAROL_DOC]

        users = repo.find_all()

        self.assertEqual(len(users), 1)
        self.assertEqual(users[0].id, 'local-1')
        self.assertEqual(users[0].address.geo, Geo(lat='59.9', lng='10.7'))
        self.assertTrue(users[0].active)
        self.assertIsNone(users[0].origin)
        collection.find.assert_called_once_with({})

    def test_find_by_id(self):
        repo, _, collection = make_repo()
        collection.find_one.return_value = CAROL_DOC

        user = repo.find_by_id('local-1')

        self.assertEqual(user.username, 'carol')
        collection.find_one.assert_called_once_with({'_id': 'local-1'})

    def test_find_by_id_missing(self):
        repo, _, collection = make_repo()
        collection.find_one.return_value = None
        self.assertIsNone(repo.find_by_id('nope'))

    def test_object_id_is_stringified(self):
        repo, _, collection = make_repo()
        oid = ObjectId()
        collection.find.return_value = [{'_id': oid, 'username': 'legacy'}]

        users = repo.find_all()

        self.assertEqual(users[0].id, str(oid))

    def test_find_by_username_exact(self):
        repo, _, collection = make_repo()
        collection.find_one.return_value = CAROL_DOC

        repo.find_by_username('carol')

        collection.find_one.assert_called_once_with({'username': 'carol'})

    def test_find_by_username_like_escapes_input(self):
        repo, _, collection = make_repo()
        collection.find.return_value = []

        repo.find_by_username_like('a.b')

        collection.find.assert_called_once_with(
            {'username': {'$regex': r'a\.b', '$options': 'i'}}
        )

    def test_read_failure_raises_persistence_error(self):
        repo, _, collection = make_repo()
        collection.find.side_effect = PyMongoError("boom")
        collection.find_one.side_effect = PyMongoError("boom")

        with self.assertRaises(PersistenceError):
            repo.find_all()
        with self.assertRaises(PersistenceError):
            repo.find_by_id('x')
        with self.assertRaises(PersistenceError):
            repo.find_by_username('x')
        with self.assertRaises(PersistenceError):
            repo.find_by_username_like('x')


class TestMongoUserRepositorySave(unittest.TestCase):

    def test_save_upserts_by_id_without_origin(self):
        repo, _, collection = make_repo()
        user = UserRecord(
            id='local-1', username='carol', origin=UserOrigin.EXTERNAL,
            address=Address(city='Oslo'),
        )

        saved = repo.save(user)

        args, kwargs = collection.replace_one.call_args
        self.assertEqual(args[0], {'_id': 'local-1'})
        self.assertNotIn('origin', args[1])
        self.assertNotIn('id', args[1])
        self.assertEqual(args[1]['address']['city'], 'Oslo')
        self.assertTrue(kwargs['upsert'])
        self.assertEqual(saved.id, 'local-1')
        self.assertIsNone(saved.origin)

    def test_save_generates_missing_id(self):
        repo, _, collection = make_repo()

        saved = repo.save(UserRecord(username='eve'))

        self.assertEqual(len(saved.id), 32)
        args, _ = collection.replace_one.call_args
        self.assertEqual(args[0], {'_id': saved.id})

    def test_save_failure_raises_persistence_error(self):
        repo, _, collection = make_repo()
        collection.replace_one.side_effect = PyMongoError("write failed")

        with self.assertRaises(PersistenceError):
            repo.save(UserRecord(id='x', username='eve'))


class TestEnsureIndexes(unittest.TestCase):

    def test_creates_username_index(self):
        repo, _, collection = make_repo()

        self.assertTrue(repo.ensure_indexes())

        collection.create_index.assert_called_once_with([('username', 1)], name='idx_users_username')

    def test_returns_false_on_failure(self):
        repo, _, collection = make_repo()
        collection.create_index.side_effect = PyMongoError("not authorized")

        self.assertFalse(repo.ensure_indexes())


if __name__ == '__main__':
    unittest.main()
