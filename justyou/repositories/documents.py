# justyou/repositories/documents.py
"""
Generic CRUD over the document store.

Every record carries an owner field (``userId`` or, for stories,
``authorId``). Reads that are scoped to a user filter on that field; nothing
else is enforced here. Writes replace the given fields; the last writer wins.
"""
from typing import Optional, List, Dict, Any
from datetime import datetime, timezone

from justyou.db import mongo


def _now():
    return datetime.now(timezone.utc)


def _to_id(doc):
    # convert Mongo's _id (ObjectId) to str when returning
    if not doc:
        return None
    doc = dict(doc)
    if "_id" in doc:
        doc["id"] = str(doc["_id"])
        del doc["_id"]
    return doc


async def create_document(collection: str, payload: Dict[str, Any]) -> Dict[str, Any]:
    db = mongo.get_db()
    doc = dict(payload)
    doc.setdefault("createdAt", _now())
    res = await db[collection].insert_one(doc)
    doc["_id"] = res.inserted_id
    return _to_id(doc)


async def get_document(collection: str, doc_id: str) -> Optional[Dict[str, Any]]:
    oid = mongo.to_object_id(doc_id)
    if oid is None:
        return None
    db = mongo.get_db()
    doc = await db[collection].find_one({"_id": oid})
    return _to_id(doc)


async def list_documents(
    collection: str,
    query: Dict[str, Any],
    sort: Optional[List[tuple]] = None,
    skip: int = 0,
    limit: int = 0,
) -> List[Dict[str, Any]]:
    db = mongo.get_db()
    cur = db[collection].find(query)
    if sort:
        cur = cur.sort(sort)
    if skip:
        cur = cur.skip(skip)
    if limit:
        cur = cur.limit(limit)
    out = []
    async for d in cur:
        out.append(_to_id(d))
    return out


async def list_owned(collection: str, owner_id: str, extra: Optional[Dict[str, Any]] = None, **kwargs) -> List[Dict[str, Any]]:
    query = {mongo.OWNER_FIELDS[collection]: owner_id}
    if extra:
        query.update(extra)
    kwargs.setdefault("sort", [("createdAt", -1), ("_id", -1)])
    return await list_documents(collection, query, **kwargs)


async def update_document(collection: str, doc_id: str, fields: Dict[str, Any]) -> Optional[Dict[str, Any]]:
    oid = mongo.to_object_id(doc_id)
    if oid is None:
        return None
    db = mongo.get_db()
    if fields:
        res = await db[collection].update_one({"_id": oid}, {"$set": fields})
        if res.matched_count == 0:
            return None
    return _to_id(await db[collection].find_one({"_id": oid}))


async def delete_document(collection: str, doc_id: str) -> bool:
    oid = mongo.to_object_id(doc_id)
    if oid is None:
        return False
    db = mongo.get_db()
    res = await db[collection].delete_one({"_id": oid})
    return res.deleted_count > 0
